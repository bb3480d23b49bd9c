from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import get_current_user, require_role
from storefront.data.database import get_db
from storefront.domain.schemas import SessionUser, UserCreated, UserOut, UserRegister
from storefront.services.identity_service import ROLE_ADMIN
from storefront.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserCreated)
def register_user(payload: UserRegister, db: Session = Depends(get_db)):
    user = UserService(db).register(payload)
    return UserCreated(user=user, message="Created user successfully")


@router.get("/me", response_model=SessionUser)
def who_am_i(user: SessionUser = Depends(get_current_user)):
    return user


@router.get("/{user_id}", response_model=UserOut, dependencies=[Depends(require_role(ROLE_ADMIN))])
def get_user(user_id: str, db: Session = Depends(get_db)):
    return UserService(db).get_user(user_id)
