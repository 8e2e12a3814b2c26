from pydantic import EmailStr, field_validator
from typing import Optional
from datetime import datetime
from app.models.user import UserRole
from app.schemas.base import CamelModel

class UserBase(CamelModel):
    name: str
    email: EmailStr
    role: UserRole = UserRole.STUDENT
    avatar_url: Optional[str] = None

class UserCreate(UserBase):
    pass

class UserUpdate(CamelModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    role: Optional[UserRole] = None
    avatar_url: Optional[str] = None

    @field_validator("name", "email", "role")
    def required_not_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v

class UserResponse(UserBase):
    id: str
    created_at: datetime
    updated_at: datetime
