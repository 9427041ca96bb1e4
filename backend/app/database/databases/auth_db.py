"""
Auth database configuration.
Stores user identity and credential hashes.
"""

DB_NAME = "auth_db"


class Collections:
    """Collection names in auth_db."""
    USERS = "users"
