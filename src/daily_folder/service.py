"""Jump to date folders: resolve or create the chain, then select it."""

from datetime import date
from pathlib import Path

from loguru import logger

from daily_folder.config import (
    DEFAULT_ROOT_LABEL,
    DEFAULT_SCOPE,
    DEFAULT_SESSION,
    ROOT_LABEL_PREF_KEY,
)
from daily_folder.core.database.connection import open_database
from daily_folder.core.database.preferences import SqlitePreferences
from daily_folder.core.hierarchy.existing import refresh_existing
from daily_folder.core.hierarchy.resolver import HierarchyResolver
from daily_folder.core.path.model import derive_path, format_date, parse_date
from daily_folder.core.session import Session, SessionRegistry
from daily_folder.core.store.sqlite_store import SqliteCollectionStore
from daily_folder.core.tree.navigator import TreeNavigator
from daily_folder.core.tree.view import CollectionTreeView
from daily_folder.errors import CreationFailed, NavigationIncomplete
from daily_folder.models.node import CollectionNode
from daily_folder.protocols import PreferenceStoreProtocol, StoreProtocol


class DailyFolder:
    """Entry point for callers that present date folders."""

    def __init__(
        self,
        store: StoreProtocol,
        preferences: PreferenceStoreProtocol,
        sessions: SessionRegistry | None = None,
    ) -> None:
        self.store = store
        self.preferences = preferences
        self.sessions = sessions if sessions is not None else SessionRegistry()
        self.resolver = HierarchyResolver(store)

    @property
    def root_label(self) -> str:
        return self.preferences.get_string(ROOT_LABEL_PREF_KEY, DEFAULT_ROOT_LABEL)

    def set_root_label(self, value: str) -> None:
        value = value.strip()
        if not value:
            msg = "Root label must not be empty"
            raise ValueError(msg)
        self.preferences.set_string(ROOT_LABEL_PREF_KEY, value)

    def _session(self, session_id: str) -> Session:
        return self.sessions.attach(session_id)

    async def goto_date(
        self,
        date_string: str,
        scope: str | None = None,
        *,
        create_if_missing: bool = True,
        session_id: str = DEFAULT_SESSION,
    ) -> CollectionNode | None:
        """Select the date folder for date_string in the session's tree view.

        The chain is resolved in the scope the session's view shows. With
        create_if_missing=False a missing folder is never created. Errors are
        logged and reported as None; nothing propagates to the caller.

        Args:
            date_string: Date as YYYY-MM-DD.
            scope: Library scope; must match the view's scope (None = the view's).
            create_if_missing: Create missing segments before navigating.
            session_id: Session whose tree view is driven.

        Returns:
            The selected day collection, or None.
        """
        logger.info("Going to {} (create_if_missing={})", date_string, create_if_missing)
        try:
            view = self._session(session_id).view
            if view is None:
                logger.error("No tree view attached to session {}.", session_id)
                return None
            if scope is not None and scope != view.scope:
                logger.error(
                    "Session {} shows scope {}, cannot go to a folder in {}.",
                    session_id,
                    view.scope,
                    scope,
                )
                return None
            scope = view.scope

            path = derive_path(parse_date(date_string), self.root_label)
            chain = await self.resolver.resolve_path(path, scope)

            if chain is None and create_if_missing:
                logger.info("Path not found for {}. Creating...", date_string)
                await self.resolver.ensure_path(path, scope)
                chain = await self.resolver.resolve_path(path, scope)

            if chain is None:
                logger.info("Collection path for {} not found. Aborting.", date_string)
                return None

            # Rows may predate collections created by this or another session.
            await view.load()
            return await TreeNavigator(view).navigate_to_chain(chain)
        except CreationFailed as e:
            logger.error("Creating date folder {} failed at {}: {}", date_string, e.name, e)
        except NavigationIncomplete as e:
            logger.warning("Navigation failed for {}: {}", date_string, e)
        except Exception:
            logger.exception("Going to date folder {} failed", date_string)
        return None

    async def goto_today(
        self, scope: str | None = None, *, session_id: str = DEFAULT_SESSION
    ) -> CollectionNode | None:
        """Open today's folder, creating it if needed."""
        return await self.goto_date(
            format_date(date.today()), scope, create_if_missing=True, session_id=session_id
        )

    async def open_existing(
        self, date_string: str, scope: str | None = None, *, session_id: str = DEFAULT_SESSION
    ) -> CollectionNode | None:
        """Navigate to a date only if the last refresh saw its folder.

        Never creates anything; unknown dates are ignored.
        """
        if date_string not in self._session(session_id).existing:
            logger.debug("No existing folder for {}, ignoring", date_string)
            return None
        return await self.goto_date(
            date_string, scope, create_if_missing=False, session_id=session_id
        )

    async def refresh_existing(
        self, scope: str | None = None, *, session_id: str = DEFAULT_SESSION
    ) -> set[str]:
        """Rebuild the session's set of existing date folders and return it.

        The scope defaults to the one the session's view shows.
        """
        session = self._session(session_id)
        if scope is None:
            scope = session.view.scope if session.view is not None else DEFAULT_SCOPE
        existing = await refresh_existing(self.store, self.root_label, scope)
        session.existing = existing
        return set(existing)


def open_sqlite_service(
    data_dir: Path, scope: str = DEFAULT_SCOPE
) -> tuple[DailyFolder, CollectionTreeView]:
    """Open the database under data_dir and attach a headless view to the default session.

    The default session owns the connection; detaching it closes the connection.
    """
    conn = open_database(data_dir)
    store = SqliteCollectionStore(conn)
    service = DailyFolder(store, SqlitePreferences(conn))
    # Headless view: rows rebuild on the next loop iteration, nothing to wait for.
    view = CollectionTreeView(store, scope, settle_delay=0.0)
    session = service.sessions.attach(DEFAULT_SESSION, view)
    session.acquire(conn.close, "database connection")
    return service, view
