from datetime import datetime
from sqlalchemy import select, func
from sqlalchemy.orm import Session

from order_core.data.models.user import UserModel
from order_core.domain.enums import UserRole


class UserRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: str) -> UserModel | None:
        return self.db.get(UserModel, user_id)

    def count_customers(self, since: datetime | None = None) -> int:
        stmt = select(func.count(UserModel.id)).where(UserModel.role == UserRole.USER)
        if since is not None:
            stmt = stmt.where(UserModel.created_at >= since)
        return self.db.execute(stmt).scalar_one()
