from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.data.models.user import UserModel
from storefront.domain.errors import ConflictError, NotFoundError
from storefront.domain.schemas import UserOut, UserRegister
from storefront.repos.user_repo import UserRepo
from storefront.services.identity_service import ROLE_CUSTOMER, hash_password
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class UserService:
    def __init__(self, db: Session):
        self.repo = UserRepo(db)

    def register(self, payload: UserRegister) -> UserOut:
        for existing in self.repo.find_existing(payload.username, payload.email):
            if existing.username == payload.username:
                raise ConflictError("Username is already registered.")
            raise ConflictError("Email is already registered.")

        user = UserModel(
            username=payload.username,
            email=payload.email,
            password=hash_password(payload.password),
            role=ROLE_CUSTOMER,
        )
        try:
            created = self.repo.create_user(user)
        except IntegrityError as e:
            self.repo.rollback()
            raise ConflictError("Username or email is already registered.") from e

        logger.info(f"Registered user {created.id} ({created.username})")
        return UserOut.model_validate(created)

    def get_user(self, user_id: str) -> UserOut:
        user = self.repo.get_user(user_id)
        if not user:
            raise NotFoundError("User not found")
        return UserOut.model_validate(user)
