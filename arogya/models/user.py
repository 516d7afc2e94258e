from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func

from ..core.database import Base
from .types import new_id


class UserRole(Base):
    """Role claim for an auth identity, maintained by the managed backend."""

    __tablename__ = "user_roles"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), nullable=False, index=True)
    role = Column(String(20), nullable=False)  # app_role: doctor | patient
    created_at = Column(DateTime, server_default=func.now())

    def __repr__(self):
        return f"<UserRole(user_id={self.user_id}, role='{self.role}')>"
