"""Collection store backed by SQLite."""

import sqlite3
import time

from loguru import logger

from daily_folder.errors import PersistenceError
from daily_folder.models.node import CollectionNode

_COLUMNS = "id, name, parent_id, library_scope"


def _to_node(row: tuple) -> CollectionNode:
    return CollectionNode(id=row[0], name=row[1], parent_id=row[2], library_scope=row[3])


class SqliteCollectionStore:
    """Collection store over the `collections` table.

    Queries return collections sorted by name, the order a collection tree
    shows them in.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    async def query_children_by_parent(self, parent_id: int) -> list[CollectionNode]:
        rows = self._conn.execute(
            f"SELECT {_COLUMNS} FROM collections WHERE parent_id = ? "
            "ORDER BY name COLLATE NOCASE, id",
            (parent_id,),
        ).fetchall()
        return [_to_node(r) for r in rows]

    async def query_roots_by_scope(self, scope: str) -> list[CollectionNode]:
        rows = self._conn.execute(
            f"SELECT {_COLUMNS} FROM collections "
            "WHERE library_scope = ? AND parent_id IS NULL "
            "ORDER BY name COLLATE NOCASE, id",
            (scope,),
        ).fetchall()
        return [_to_node(r) for r in rows]

    async def create_and_persist(
        self, name: str, parent_id: int | None, scope: str
    ) -> CollectionNode:
        """Insert a collection and commit.

        Raises:
            PersistenceError: The insert failed, or the parent does not exist
                in the same scope.
        """
        try:
            if parent_id is not None:
                row = self._conn.execute(
                    "SELECT library_scope FROM collections WHERE id = ?", (parent_id,)
                ).fetchone()
                if row is None or row[0] != scope:
                    msg = f"Parent {parent_id} does not exist in scope {scope!r}"
                    raise PersistenceError(msg)

            now_ms = int(time.time() * 1000)
            cur = self._conn.execute(
                "INSERT INTO collections (name, parent_id, library_scope, created) "
                "VALUES (?, ?, ?, ?)",
                (name, parent_id, scope, now_ms),
            )
            self._conn.commit()
        except sqlite3.Error as e:
            self._conn.rollback()
            msg = f"Failed to save collection {name!r}: {e}"
            raise PersistenceError(msg) from e

        node_id = cur.lastrowid
        if node_id is None:
            msg = f"Store assigned no id to collection {name!r}"
            raise PersistenceError(msg)
        logger.debug("Persisted collection {} (id={}, parent={})", name, node_id, parent_id)
        return CollectionNode(id=node_id, name=name, parent_id=parent_id, library_scope=scope)
