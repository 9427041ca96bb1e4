"""
Global test fixtures for the Cat Registry.

This module provides shared fixtures for all tests including:
- Mock MongoDB (mongomock-motor)
- Seeded users and the matching principals
- Cat document factory
"""

import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest
import pytest_asyncio
from bson import ObjectId

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))


# =============================================================================
# MongoDB Fixtures (mongomock-motor)
# =============================================================================

@pytest_asyncio.fixture
async def mock_async_mongo_client():
    """
    Create an async mock MongoDB client using mongomock-motor.

    This provides an in-memory MongoDB that behaves like Motor
    for testing purposes.
    """
    from mongomock_motor import AsyncMongoMockClient
    client = AsyncMongoMockClient()
    yield client
    client.close()


@pytest_asyncio.fixture
async def mock_auth_db(mock_async_mongo_client):
    """Provide mock auth_db database."""
    db = mock_async_mongo_client["auth_db"]
    # Create indexes like the real app
    await db.users.create_index("email", unique=True)
    yield db


@pytest_asyncio.fixture
async def mock_pets_db(mock_async_mongo_client):
    """Provide mock pets_db database."""
    db = mock_async_mongo_client["pets_db"]
    await db.cats.create_index("owner")
    yield db


# =============================================================================
# User Fixtures
# =============================================================================

TEST_PASSWORD = "secret-password"


@pytest.fixture
def test_password() -> str:
    """Plain password of every seeded user."""
    return TEST_PASSWORD


@pytest.fixture(scope="session")
def hashed_test_password() -> str:
    """Bcrypt hash of TEST_PASSWORD, computed once per session."""
    from app.core.security import hash_password
    return hash_password(TEST_PASSWORD)


def make_user_doc(user_name: str, email: str, role: str, hashed_password: str) -> dict:
    """A complete user document as stored in MongoDB."""
    return {
        "_id": ObjectId(),
        "user_name": user_name,
        "email": email,
        "role": role,
        "hashed_password": hashed_password,
    }


@pytest_asyncio.fixture
async def seeded_users(mock_auth_db, hashed_test_password) -> dict:
    """
    Insert three users (owner, other, admin) and return their documents
    keyed by that label.
    """
    docs = {
        "owner": make_user_doc("Alice", "alice@example.com", "user", hashed_test_password),
        "other": make_user_doc("Bobby", "bob@example.com", "user", hashed_test_password),
        "admin": make_user_doc("Admin", "admin@example.com", "admin", hashed_test_password),
    }
    await mock_auth_db.users.insert_many(list(docs.values()))
    return docs


@pytest.fixture
def principals(seeded_users) -> dict:
    """Principals matching the seeded users."""
    from app.models.user import Principal

    return {
        label: Principal(
            id=str(doc["_id"]),
            role=doc["role"],
            user_name=doc["user_name"],
            email=doc["email"],
        )
        for label, doc in seeded_users.items()
    }


# =============================================================================
# Cat Fixtures
# =============================================================================

def make_cat_doc(owner_id: ObjectId, lng: float, lat: float, cat_name: str = "Tom") -> dict:
    """A cat document as stored in MongoDB."""
    return {
        "_id": ObjectId(),
        "cat_name": cat_name,
        "weight": 4.2,
        "owner": owner_id,
        "filename": f"{cat_name.lower()}.jpg",
        "birthdate": datetime(2020, 1, 1, tzinfo=timezone.utc),
        "location": {"type": "Point", "coordinates": [lng, lat]},
    }


@pytest_asyncio.fixture
async def seeded_cats(mock_pets_db, seeded_users) -> dict:
    """
    Insert cats for the owner and the other user.

    Keys: "owner_cat" (5, 5), "owner_far_cat" (20, 20), "other_cat" (1, 9).
    """
    docs = {
        "owner_cat": make_cat_doc(seeded_users["owner"]["_id"], 5.0, 5.0, "Tom"),
        "owner_far_cat": make_cat_doc(seeded_users["owner"]["_id"], 20.0, 20.0, "Felix"),
        "other_cat": make_cat_doc(seeded_users["other"]["_id"], 1.0, 9.0, "Garfield"),
    }
    await mock_pets_db.cats.insert_many(list(docs.values()))
    return docs


@pytest.fixture
def upload_dir(tmp_path):
    """Directory cat photos are written to during a test."""
    return tmp_path / "uploads"


@pytest.fixture
def make_photo_upload(upload_dir):
    """Build a checked PhotoUpload the way the create route does."""
    import io

    from fastapi import UploadFile
    from starlette.datastructures import Headers

    from app.config import Settings
    from app.services.upload_service import PhotoUpload

    def _make(filename="tom.jpg", content_type="image/jpeg", lng=24.94, lat=60.17):
        file = UploadFile(
            file=io.BytesIO(b"\xff\xd8\xff fake jpeg"),
            filename=filename,
            headers=Headers({"content-type": content_type}),
        )
        settings = Settings(upload_dir=str(upload_dir))
        return PhotoUpload.from_form(file, lng, lat, settings)

    return _make


@pytest.fixture
def mock_photo_upload(make_photo_upload):
    """A valid jpeg at (24.94, 60.17), not yet stored."""
    return make_photo_upload()
