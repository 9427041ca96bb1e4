"""
User model for authentication database.
"""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class UserRole(str, Enum):
    """User role levels."""
    USER = "user"
    ADMIN = "admin"


class User(BaseModel):
    """
    User document model for MongoDB auth_db.users collection.
    """
    id: Optional[str] = Field(None, alias="_id", description="MongoDB ObjectId as string")
    user_name: str = Field(..., min_length=3, description="Display name")
    email: EmailStr = Field(..., description="Unique email address")
    hashed_password: str = Field(..., description="Bcrypt hashed password")
    role: UserRole = Field(default=UserRole.USER, description="Role assigned at creation")

    class Config:
        populate_by_name = True


class Principal(BaseModel):
    """
    The authenticated caller, resolved from the access token before any
    service runs. Passed explicitly into every principal-scoped operation.
    """
    id: str
    role: UserRole
    user_name: str
    email: str
