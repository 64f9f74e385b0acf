"""Protocols for the collaborators the daily-folder core drives."""

from typing import Protocol, runtime_checkable

from daily_folder.models.node import CollectionNode


@runtime_checkable
class StoreProtocol(Protocol):
    """Protocol for collection stores."""

    async def query_children_by_parent(self, parent_id: int) -> list[CollectionNode]:
        """Return the direct children of a collection, in display order."""
        ...

    async def query_roots_by_scope(self, scope: str) -> list[CollectionNode]:
        """Return the parentless collections of a library scope."""
        ...

    async def create_and_persist(
        self, name: str, parent_id: int | None, scope: str
    ) -> CollectionNode:
        """Create and save a collection, raising PersistenceError on failure."""
        ...


@runtime_checkable
class TreeViewProtocol(Protocol):
    """Protocol for row-indexed, lazily expandable collection tree views."""

    @property
    def scope(self) -> str:
        """Library scope whose collections the view shows."""
        ...

    @property
    def row_count(self) -> int:
        """Number of currently materialized rows."""
        ...

    def select_row(self, index: int) -> None:
        """Select the row at index."""
        ...

    def get_selected_node(self) -> CollectionNode | None:
        """Return the collection behind the selected row, if any."""
        ...

    def is_container_row(self, index: int) -> bool:
        """Whether the row can be expanded."""
        ...

    def is_container_expanded(self, index: int) -> bool:
        """Whether the row is currently expanded."""
        ...

    def toggle_container_open(self, index: int) -> None:
        """Expand or collapse the row; child rows may appear later."""
        ...

    async def settle(self) -> None:
        """Wait for rows to materialize after an expand."""
        ...

    async def load(self) -> None:
        """Re-read the collection tree so newly created collections show up."""
        ...


@runtime_checkable
class PreferenceStoreProtocol(Protocol):
    """Protocol for key-value preference stores."""

    def get_string(self, key: str, fallback: str) -> str:
        """Read a string preference, returning fallback when unset or unreadable."""
        ...

    def set_string(self, key: str, value: str) -> None:
        """Write a string preference."""
        ...
