"""
Database definitions and collection constants.
"""
from app.database.databases import auth_db, pets_db

__all__ = ["auth_db", "pets_db"]
