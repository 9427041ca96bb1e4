"""
Pets database configuration.
Stores cat records with their owner reference and location.
"""

DB_NAME = "pets_db"


class Collections:
    """Collection names in pets_db."""
    CATS = "cats"
