"""
Index creation, run once at startup.
"""
from motor.motor_asyncio import AsyncIOMotorClient

from app.database.databases import auth_db, pets_db


async def create_indexes(client: AsyncIOMotorClient) -> None:
    """Create the unique email, owner and 2dsphere location indexes."""
    users = client[auth_db.DB_NAME][auth_db.Collections.USERS]
    await users.create_index("email", unique=True)

    cats = client[pets_db.DB_NAME][pets_db.Collections.CATS]
    await cats.create_index("owner")
    await cats.create_index([("location", "2dsphere")])
