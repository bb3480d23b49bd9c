from sqlalchemy import select, or_
from sqlalchemy.orm import Session

from storefront.data.models.user import UserModel


class UserRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: str) -> UserModel | None:
        return self.db.get(UserModel, user_id)

    def get_by_email(self, email: str) -> UserModel | None:
        return self.db.scalars(select(UserModel).where(UserModel.email == email)).first()

    def find_existing(self, username: str, email: str) -> list[UserModel]:
        stmt = select(UserModel).where(or_(UserModel.username == username, UserModel.email == email))
        return list(self.db.scalars(stmt))

    def create_user(self, user: UserModel) -> UserModel:
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def rollback(self):
        self.db.rollback()
