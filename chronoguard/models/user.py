"""User model definitions."""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class UserRole(str, Enum):
    """User roles; the role gates every permission check."""

    MANAGER = "Manager"
    EMPLOYEE = "Employee"


class UserBase(BaseModel):
    """Base user fields."""

    username: str = Field(min_length=1)
    name: str = Field(min_length=1)
    role: UserRole = UserRole.EMPLOYEE
    avatar: Optional[str] = None


class UserCreate(UserBase):
    """User creation model. The id is generated when omitted."""

    id: Optional[str] = None


class UserUpdate(BaseModel):
    """User update model - all fields optional."""

    username: Optional[str] = Field(default=None, min_length=1)
    name: Optional[str] = Field(default=None, min_length=1)
    role: Optional[UserRole] = None
    avatar: Optional[str] = None


class User(UserBase):
    """Full user model with database fields."""

    id: str = Field(alias="_id", serialization_alias="id")

    model_config = {"populate_by_name": True}

    @property
    def is_manager(self) -> bool:
        return self.role == UserRole.MANAGER
