from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, model_validator

from ..users.models import Role


class RegisterUserRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=100)
    email: EmailStr
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1, max_length=100)
    confirm_password: str

    @model_validator(mode="after")
    def passwords_match(self):
        if self.password != self.confirm_password:
            raise ValueError("The password and confirmation password do not match.")
        return self


class LoginRequest(BaseModel):
    # Accepts either the username or the email address
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    remember_me: bool = False


class Identity(BaseModel):
    """Claims carried by a validated credential."""
    user_id: str
    username: str
    email: str
    first_name: str
    last_name: str
    role: str
    expires_at: datetime
    persistent: bool = False

    @property
    def is_admin(self) -> bool:
        return self.role.lower() == Role.ADMIN.value.lower()


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_at: datetime
    redirect: str
    message: str


class ProfileResponse(BaseModel):
    username: str
    email: str
    first_name: str
    last_name: str
    role: str
    is_authenticated: bool = True


class MessageResponse(BaseModel):
    success: bool = True
    message: str
    redirect: Optional[str] = None
