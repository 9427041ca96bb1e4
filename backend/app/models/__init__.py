"""
Pydantic models for database documents and data structures.
"""
from app.models.user import User, UserRole, Principal
from app.models.location import GeoPoint

__all__ = [
    "User",
    "UserRole",
    "Principal",
    "GeoPoint",
]
