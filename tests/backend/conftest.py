"""
Backend-specific test fixtures and configuration.

These fixtures extend the global fixtures with services bound to the
mock databases and an HTTP client whose dependencies point at them.
"""

import sys
from pathlib import Path

import pytest
import pytest_asyncio

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "backend"))


# =============================================================================
# Service Fixtures
# =============================================================================

@pytest.fixture
def user_service(mock_auth_db):
    """UserService over the mock auth_db."""
    from app.services.user_service import UserService
    return UserService(mock_auth_db)


@pytest.fixture
def cat_service(mock_pets_db, mock_auth_db):
    """CatService over the mock pets_db and auth_db."""
    from app.services.cat_service import CatService
    return CatService(mock_pets_db, mock_auth_db)


@pytest.fixture
def auth_service(mock_auth_db):
    """AuthService over the mock auth_db."""
    from app.services.auth_service import AuthService
    return AuthService(mock_auth_db)


# =============================================================================
# App Override Helpers
# =============================================================================

@pytest.fixture
def app_with_mocks(user_service, cat_service, auth_service, tmp_path):
    """
    The FastAPI app with every service dependency bound to the mock databases
    and uploads written to a temporary directory.
    """
    from app.config import Settings, get_settings
    from app.dependencies.auth import get_auth_service
    from app.main import app
    from app.routers.cats import get_cat_service
    from app.routers.users import get_user_service

    app.dependency_overrides[get_user_service] = lambda: user_service
    app.dependency_overrides[get_cat_service] = lambda: cat_service
    app.dependency_overrides[get_auth_service] = lambda: auth_service
    app.dependency_overrides[get_settings] = lambda: Settings(upload_dir=str(tmp_path))
    yield app
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def async_client(app_with_mocks):
    """
    Async test client over ASGI. Lifespan is not run, so no real
    database connection is attempted.
    """
    from httpx import AsyncClient, ASGITransport

    async with AsyncClient(
        transport=ASGITransport(app=app_with_mocks),
        base_url="http://test"
    ) as ac:
        yield ac


@pytest.fixture
def tokens(seeded_users) -> dict:
    """JWT tokens for the seeded users, keyed like seeded_users."""
    from app.core.security import create_access_token

    return {
        label: create_access_token(user_id=str(doc["_id"]), role=doc["role"])
        for label, doc in seeded_users.items()
    }


# =============================================================================
# Response Assertion Helpers
# =============================================================================

@pytest.fixture
def assert_error_response():
    """Helper to assert error response structure."""
    def _assert(response, status_code: int, kind: str, message_contains: str = None):
        assert response.status_code == status_code
        data = response.json()
        assert "error" in data
        assert data["error"]["kind"] == kind
        if message_contains:
            assert message_contains.lower() in data["error"]["message"].lower()
    return _assert
