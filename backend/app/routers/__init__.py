"""
API Routers module.
"""
from app.routers import auth, cats, health, users

__all__ = ["auth", "cats", "health", "users"]
