"""Shared test fixtures."""

import sqlite3
from collections.abc import Iterator

import pytest

from daily_folder.core.database.preferences import SqlitePreferences
from daily_folder.core.database.schema import create_schema
from daily_folder.core.store.sqlite_store import SqliteCollectionStore
from daily_folder.core.tree.view import CollectionTreeView
from daily_folder.service import DailyFolder
from tests.unit.fakes import FakePreferences, FakeStore, FakeTreeView

# (name, parent name) pairs; parents are listed before their children.
POPULATED_COLLECTIONS = [
    ("Daily Folder", None),
    ("2025", "Daily Folder"),
    ("2025-03", "2025"),
    ("2025-03-07", "2025-03"),
    ("notes", "2025-03"),
    ("Reading List", None),
]


@pytest.fixture
def db() -> Iterator[sqlite3.Connection]:
    """Return an in-memory DB with the schema created."""
    conn = sqlite3.connect(":memory:")
    create_schema(conn)
    yield conn
    conn.close()


@pytest.fixture
def populated_db(db: sqlite3.Connection) -> sqlite3.Connection:
    """Return a DB holding one date folder (2025-03-07) and a foreign 'notes' folder."""
    ids: dict[str, int] = {}
    for name, parent in POPULATED_COLLECTIONS:
        cur = db.execute(
            "INSERT INTO collections (name, parent_id, library_scope, created) "
            "VALUES (?, ?, 'user', 1000)",
            (name, ids[parent] if parent else None),
        )
        assert cur.lastrowid is not None
        ids[name] = cur.lastrowid
    db.commit()
    return db


@pytest.fixture
def sqlite_service(populated_db: sqlite3.Connection) -> DailyFolder:
    """Return a service over the populated DB with a tree view attached."""
    store = SqliteCollectionStore(populated_db)
    service = DailyFolder(store, SqlitePreferences(populated_db))
    service.sessions.attach("main", CollectionTreeView(store, "user", settle_delay=0.0))
    return service


@pytest.fixture
def fake_store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def fake_service(fake_store: FakeStore) -> DailyFolder:
    """Return a service over an empty FakeStore with a FakeTreeView attached."""
    service = DailyFolder(fake_store, FakePreferences())
    service.sessions.attach("main", FakeTreeView(fake_store))
    return service
