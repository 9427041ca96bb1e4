"""
User request/response schemas.
"""
from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class UserOutput(BaseModel):
    """Public user projection. Never carries the password hash or role."""
    id: str = Field(..., description="User ID")
    user_name: str = Field(..., description="Display name")
    email: str = Field(..., description="User email")


class RegisterRequest(BaseModel):
    """
    Registration request body.

    Any role sent by the client is ignored; new users are always plain users.
    """
    user_name: str = Field(..., min_length=3, description="Display name (min 3 characters)")
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=4, description="User password (min 4 characters)")


class UserUpdate(BaseModel):
    """Self-update request. Role is deliberately not updatable."""
    user_name: Optional[str] = Field(None, min_length=3, description="New display name")
    email: Optional[EmailStr] = Field(None, description="New email address")
    password: Optional[str] = Field(None, min_length=4, description="New password")
