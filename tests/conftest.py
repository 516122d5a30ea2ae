# tests/conftest.py
from __future__ import annotations

import os
import tempfile
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

_RUNTIME_DIR = Path(tempfile.mkdtemp(prefix="ayoma-tests-"))
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("DATA_DIR", str(_RUNTIME_DIR / "db"))
os.environ.setdefault("UPLOAD_DIR", str(_RUNTIME_DIR / "uploads"))
os.environ["SEED_DEMO_DATA"] = "false"

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from ayoma.db.session import get_store
from ayoma.db.store import MemoryRecordStore
from ayoma.main import app as fastapi_app
from ayoma.models import User
from ayoma.services.accounts import AccountService
from ayoma.services.content import ContentService
from ayoma.services.media import MediaStorage, get_media_storage
from ayoma.services.social_graph import SocialGraphService
from ayoma.services.tokens import TokenService, get_token_service


@dataclass
class RegisteredUser:
    """A user created through the account service, with its token."""

    user: User
    token: str
    password: str

    @property
    def id(self) -> str:
        return self.user.id

    @property
    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


@pytest.fixture()
def store() -> MemoryRecordStore:
    """Fresh in-memory record store for every test."""
    return MemoryRecordStore()


@pytest.fixture()
def media_storage(tmp_path: Path) -> MediaStorage:
    return MediaStorage(tmp_path / "uploads", "/uploads")


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_dependencies(
    app: FastAPI,
    store: MemoryRecordStore,
    media_storage: MediaStorage,
) -> Iterator[None]:
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_media_storage] = lambda: media_storage
    try:
        yield
    finally:
        app.dependency_overrides.pop(get_store, None)
        app.dependency_overrides.pop(get_media_storage, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def token_service() -> TokenService:
    return get_token_service()


@pytest.fixture()
def accounts(store: MemoryRecordStore, token_service: TokenService) -> AccountService:
    return AccountService(store, token_service)


@pytest.fixture()
def graph(store: MemoryRecordStore) -> SocialGraphService:
    return SocialGraphService(store)


@pytest.fixture()
def content(store: MemoryRecordStore) -> ContentService:
    return ContentService(store)


def _register(accounts: AccountService, username: str) -> RegisteredUser:
    password = f"{username}-pw123"
    user, token = accounts.register(username, f"{username}@x.com", password)
    return RegisteredUser(user=user, token=token, password=password)


@pytest.fixture()
def alice(accounts: AccountService) -> RegisteredUser:
    """Primary test user."""
    return _register(accounts, "alice")


@pytest.fixture()
def bob(accounts: AccountService) -> RegisteredUser:
    """Secondary test user."""
    return _register(accounts, "bob")


@pytest.fixture()
def carol(accounts: AccountService) -> RegisteredUser:
    return _register(accounts, "carol")
