"""
Notebox Backend — Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped, created fresh for each test):
    ├── user_store / folder_store / note_store: in-memory stores (tests/fakes.py)
    ├── verifier: static token → uid map, no Firebase
    ├── note_service / auth_service: services wired to the fakes
    └── test_client: HTTPX AsyncClient with the fakes injected through
                     app.dependency_overrides

Test users:
    alice  (token "token-alice", root folder F1)
    bob    (token "token-bob",   root folder F2)
    ghost  (token "token-ghost", valid token but no user record)
"""

import os
import tempfile

# Override settings for testing BEFORE any notebox imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(
    tempfile.mkdtemp(prefix="notebox_test_"), "test.db"
)
os.environ["FIREBASE_CREDENTIALS"] = ""
os.environ["NOTES_PREFIX"] = ""
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from fakes import (
    InMemoryFolderStore,
    InMemoryNoteStore,
    InMemoryUserStore,
    StaticTokenVerifier,
)
from notebox.services.auth_service import AuthService
from notebox.services.note_service import NoteService

FIXED_TIMESTAMP = 1_700_000_000_000

ALICE = {"uid": "alice", "root": "F1"}
BOB = {"uid": "bob", "root": "F2"}

TOKENS = {
    "token-alice": "alice",
    "token-bob": "bob",
    "token-ghost": "ghost",
}


@pytest.fixture
def user_store():
    return InMemoryUserStore([ALICE, BOB])


@pytest.fixture
def folder_store():
    return InMemoryFolderStore(["F1", "F2", "F3"])


@pytest.fixture
def note_store():
    return InMemoryNoteStore()


@pytest.fixture
def verifier():
    return StaticTokenVerifier(TOKENS)


@pytest.fixture
def clock():
    """Fixed clock; tests that need distinct timestamps advance `clock.now`."""

    class _Clock:
        now = FIXED_TIMESTAMP

        def __call__(self):
            return self.now

    return _Clock()


@pytest.fixture
def note_service(note_store, folder_store, clock):
    return NoteService(notes=note_store, folders=folder_store, clock=clock)


@pytest.fixture
def auth_service(verifier, user_store):
    return AuthService(verifier, user_store)


@pytest.fixture
def alice():
    return dict(ALICE)


@pytest.fixture
def bob():
    return dict(BOB)


@pytest_asyncio.fixture
async def test_client(verifier, user_store, note_store, folder_store, note_service):
    """
    Provides an async HTTP test client with in-memory stores.

    Usage:
        async def test_view(test_client):
            response = await test_client.get("/view/x", headers={"Authorization": "token-alice"})
    """
    from notebox.main import app
    from notebox.routes import dependencies

    app.dependency_overrides[dependencies.get_identity_verifier] = lambda: verifier
    app.dependency_overrides[dependencies.get_user_store] = lambda: user_store
    app.dependency_overrides[dependencies.get_note_store] = lambda: note_store
    app.dependency_overrides[dependencies.get_folder_store] = lambda: folder_store
    app.dependency_overrides[dependencies.get_note_service] = lambda: note_service

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
