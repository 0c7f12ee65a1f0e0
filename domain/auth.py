"""Domain Entities - Auth"""
from pydantic import BaseModel
from datetime import datetime
from typing import Optional

from domain.enums import UserRole


class User(BaseModel):
    """User Entity"""
    user_id: Optional[int] = None
    email: str
    full_name: Optional[str] = None
    role: UserRole = UserRole.USER
    disabled: bool = False
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


class UserInDB(User):
    """User with hashed password for DB storage"""
    hashed_password: str
