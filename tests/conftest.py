# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - In-memory stand-in for the Supabase client (auth + storage)
# - A TestClient with settings injected through dependency overrides
# =============================================================================

import json
import os
from types import SimpleNamespace
from typing import Any
from unittest.mock import patch

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-service-key")
os.environ.setdefault("ADMIN_EMAILS", "admin@example.com")
os.environ.setdefault("ENVIRONMENT", "development")

import pytest
from fastapi.testclient import TestClient

from app.config import Settings, get_settings
from app.main import app
from lib.supabase_client import SupabaseClient

ADMIN_TOKEN = "admin-token"
USER_TOKEN = "user-token"
NO_EMAIL_TOKEN = "no-email-token"


# =============================================================================
# Fake Supabase
# =============================================================================

class FakeStorageError(Exception):
    """Shaped like storage3's StorageException: a dict payload in args[0]."""

    def __init__(self, status_code: Any, message: str, error: str = "error"):
        super().__init__({"statusCode": status_code, "message": message, "error": error})


class FakeBucket:
    def __init__(self, storage: "FakeStorage", name: str):
        self.storage = storage
        self.name = name

    def download(self, path: str) -> bytes:
        if self.storage.download_error:
            raise self.storage.download_error
        key = (self.name, path)
        if key not in self.storage.objects:
            raise FakeStorageError(404, "Object not found", "not_found")
        return self.storage.objects[key]

    def upload(self, path: str, file: bytes, file_options: dict | None = None):
        if self.storage.upload_error:
            raise self.storage.upload_error
        self.storage.uploads.append(
            {"bucket": self.name, "path": path, "file": file, "file_options": file_options}
        )
        self.storage.objects[(self.name, path)] = file
        return SimpleNamespace(path=path)


class FakeStorage:
    def __init__(self):
        self.objects: dict[tuple[str, str], bytes] = {}
        self.uploads: list[dict[str, Any]] = []
        self.download_error: Exception | None = None
        self.upload_error: Exception | None = None
        self.bucket_error: Exception | None = None

    def from_(self, name: str) -> FakeBucket:
        return FakeBucket(self, name)

    def get_bucket(self, name: str):
        if self.bucket_error:
            raise self.bucket_error
        return SimpleNamespace(id=name, name=name)

    # Helpers for tests
    def put_json(self, value: Any, bucket: str = "properties", path: str = "properties.json"):
        self.objects[(bucket, path)] = json.dumps(value).encode("utf-8")

    def get_json(self, bucket: str = "properties", path: str = "properties.json") -> Any:
        return json.loads(self.objects[(bucket, path)].decode("utf-8"))


class FakeAuth:
    def __init__(self):
        self.users = {
            ADMIN_TOKEN: SimpleNamespace(id="user-admin", email="Admin@Example.com"),
            USER_TOKEN: SimpleNamespace(id="user-plain", email="someone@example.com"),
            NO_EMAIL_TOKEN: SimpleNamespace(id="user-phone", email=None),
        }
        self.error: Exception | None = None

    def get_user(self, jwt: str | None = None):
        if self.error:
            raise self.error
        if jwt not in self.users:
            raise Exception("invalid JWT: unable to parse or verify signature")
        return SimpleNamespace(user=self.users[jwt])


class FakeSupabase:
    def __init__(self):
        self.auth = FakeAuth()
        self.storage = FakeStorage()
        self.created_with: list[dict[str, Any]] = []


# =============================================================================
# Fixtures
# =============================================================================

def make_settings(**overrides: Any) -> Settings:
    """Settings for tests, ignoring any developer .env file."""
    values = {
        "SUPABASE_URL": "https://test-project.supabase.co",
        "SUPABASE_ANON_KEY": "test-anon-key",
        "SUPABASE_SERVICE_ROLE_KEY": "test-service-key",
        "ADMIN_EMAILS": "admin@example.com, Ops@Example.com",
        "VERCEL_DEPLOY_HOOK": "",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def fake_supabase():
    """Patch client creation so every Supabase client is one FakeSupabase."""
    fake = FakeSupabase()

    def fake_create_client(url, key, options=None):
        fake.created_with.append({"url": url, "key": key, "options": options})
        return fake

    SupabaseClient.reset()
    with patch("lib.supabase_client.create_client", side_effect=fake_create_client):
        yield fake
    SupabaseClient.reset()


@pytest.fixture
def settings_override():
    """Install settings for the app; call with keyword overrides."""
    def install(**overrides: Any) -> Settings:
        config = make_settings(**overrides)
        app.dependency_overrides[get_settings] = lambda: config
        return config

    install()
    yield install
    app.dependency_overrides.clear()


@pytest.fixture
def client(fake_supabase, settings_override):
    """TestClient wired to the fake Supabase and test settings."""
    return TestClient(app)


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {ADMIN_TOKEN}"}


@pytest.fixture
def sample_properties():
    """A small properties.json collection."""
    return [
        {
            "id": "1",
            "title": "Sea view flat",
            "price": 350000,
            "address": "1 Harbour Road",
            "image": "/images/1.jpg",
            "description": "Two bedrooms overlooking the marina.",
        },
        {
            "id": 2,
            "title": "Garden cottage",
            "price": 420000,
            "address": "7 Orchard Lane",
            "image": "/images/2.jpg",
            "description": "Detached cottage with a large garden.",
        },
    ]
