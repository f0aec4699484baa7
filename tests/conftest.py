from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from cafehub.db.mongo import get_coffees_collection, get_users_collection
from cafehub.main import app
from cafehub.services.identity_service import get_identity_provider


@pytest.fixture
def database():
    return AsyncMongoMockClient()["cafeHubDB"]


@pytest.fixture
def identity():
    """Firebase stand-in: every account lookup resolves to uid 'fb-email-uid'."""
    provider = AsyncMock()
    provider.get_user_by_email.return_value = SimpleNamespace(uid="fb-email-uid")
    provider.delete_user.return_value = None
    return provider


@pytest.fixture
def client(database, identity):
    app.dependency_overrides[get_coffees_collection] = lambda: database["coffees"]
    app.dependency_overrides[get_users_collection] = lambda: database["users"]
    app.dependency_overrides[get_identity_provider] = lambda: identity
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()
