from typing import Optional
from pydantic import BaseModel

from app.constants.constants import UserRole


class User(BaseModel):
    """Registered account. Immutable after registration."""
    name: str
    user_identifier: str
    password_hash: str
    role: UserRole


class Session(BaseModel):
    """Identity of the logged-in caller."""
    user_identifier: str
    name: str
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.admin


class LoginRequest(BaseModel):
    user_identifier: str
    password: str


class RegisterRequest(BaseModel):
    name: str = ""
    user_identifier: str = ""
    password: str = ""
    confirm_password: Optional[str] = None
    role: UserRole = UserRole.mahasiswa


class UserResponse(BaseModel):
    name: str
    user_identifier: str
    role: UserRole

    class Config:
        from_attributes = True
