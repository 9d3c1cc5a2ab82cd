from sqlalchemy import Column, String, DateTime, Enum as SAEnum
import uuid

from order_core.data.database import Base
from order_core.domain.enums import UserRole
from order_core.utils.clock import utcnow


class UserModel(Base):
    """Read-only view of the identity subsystem's users."""

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    username = Column(String(50), nullable=False, unique=True)
    email = Column(String(100), nullable=False, unique=True)
    full_name = Column(String(100), nullable=True)

    role = Column(SAEnum(UserRole, native_enum=False, length=20), nullable=False, default=UserRole.USER)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    @property
    def display_name(self) -> str:
        return self.full_name or self.username
