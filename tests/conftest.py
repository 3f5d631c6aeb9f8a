# tests/conftest.py
import os

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# futurehire.main builds a module-level app on import, which refuses to
# start without a signing secret
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("STORE_BACKEND", "memory")
os.environ.setdefault("PASSWORD_HASH_ROUNDS", "1000")

from futurehire.core.config import Settings
from futurehire.core.security import PasswordHasher, TokenService
from futurehire.main import create_app
from futurehire.repositories.users import InMemoryCredentialStore


@pytest.fixture
def settings():
    return Settings(
        SECRET_KEY="test-secret-key",
        STORE_BACKEND="memory",
        PASSWORD_HASH_ROUNDS=1000,
        ACCESS_TOKEN_EXPIRE_MINUTES=60,
    )

@pytest.fixture
def tokens(settings):
    return TokenService.from_settings(settings)

@pytest.fixture
def hasher():
    return PasswordHasher(rounds=1000)

@pytest.fixture
def store():
    return InMemoryCredentialStore()

@pytest.fixture
def app(settings, store):
    return create_app(settings, store=store)

@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac
