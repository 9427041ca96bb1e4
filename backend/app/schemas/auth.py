"""
Authentication request/response schemas.
"""
from pydantic import BaseModel, EmailStr, Field

from app.schemas.user import UserOutput


class LoginRequest(BaseModel):
    """Login request body."""
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=4, description="User password")


class LoginResponse(BaseModel):
    """Login response with JWT token."""
    message: str = Field(default="Login successful", description="Success message")
    token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Token expiration time in seconds")
    user: UserOutput = Field(..., description="Authenticated user")
