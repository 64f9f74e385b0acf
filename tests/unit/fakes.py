"""Fake implementations for testing daily-folder."""

from typing import Any

from daily_folder.errors import PersistenceError
from daily_folder.models.node import CollectionNode


class FakeStore:
    """In-memory fake collection store.

    Records every call for assertions. Set `fail_queries` to make queries
    raise, or add names to `fail_create` to make their creation fail.
    """

    def __init__(self) -> None:
        self.nodes: list[CollectionNode] = []
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self.fail_queries = False
        self.fail_create: set[str] = set()
        self._next_id = 1

    def add(
        self, name: str, parent: CollectionNode | None = None, scope: str = "user"
    ) -> CollectionNode:
        """Seed a collection without recording a call."""
        node = CollectionNode(
            id=self._next_id,
            name=name,
            parent_id=parent.id if parent else None,
            library_scope=scope,
        )
        self._next_id += 1
        self.nodes.append(node)
        return node

    def add_chain(self, *names: str, scope: str = "user") -> list[CollectionNode]:
        """Seed nested collections, each a child of the previous one."""
        chain: list[CollectionNode] = []
        for name in names:
            chain.append(self.add(name, chain[-1] if chain else None, scope))
        return chain

    @property
    def created(self) -> list[tuple[Any, ...]]:
        return [args for method, args in self.calls if method == "create_and_persist"]

    def children(self, parent_id: int | None, scope: str | None = None) -> list[CollectionNode]:
        return [
            n
            for n in self.nodes
            if n.parent_id == parent_id and (scope is None or n.library_scope == scope)
        ]

    async def query_children_by_parent(self, parent_id: int) -> list[CollectionNode]:
        self.calls.append(("query_children_by_parent", (parent_id,)))
        if self.fail_queries:
            raise RuntimeError("query failed")
        return self.children(parent_id)

    async def query_roots_by_scope(self, scope: str) -> list[CollectionNode]:
        self.calls.append(("query_roots_by_scope", (scope,)))
        if self.fail_queries:
            raise RuntimeError("query failed")
        return self.children(None, scope)

    async def create_and_persist(
        self, name: str, parent_id: int | None, scope: str
    ) -> CollectionNode:
        self.calls.append(("create_and_persist", (name, parent_id, scope)))
        if name in self.fail_create:
            raise PersistenceError(f"cannot save {name}")
        node = CollectionNode(
            id=self._next_id, name=name, parent_id=parent_id, library_scope=scope
        )
        self._next_id += 1
        self.nodes.append(node)
        return node


class FakeTreeView:
    """Deterministic row list over a FakeStore.

    Rows are the depth-first listing of expanded collections. Toggling a row
    only takes effect on the next `settle()`, like a view that materializes
    children lazily.
    """

    def __init__(
        self, store: FakeStore, scope: str = "user", *, expanded: set[int] | None = None
    ) -> None:
        self.store = store
        self.scope = scope
        self.expanded: set[int] = set(expanded or ())
        self.pending: list[int] = []
        self.selected: int | None = None
        self.events: list[tuple[str, int]] = []
        self.settle_count = 0
        self.load_count = 0
        self._rows: list[CollectionNode] = []
        self._rebuild()

    def _rebuild(self) -> None:
        rows: list[CollectionNode] = []

        def walk(parent_id: int | None) -> None:
            for node in self.store.children(parent_id, self.scope):
                rows.append(node)
                if node.id in self.expanded:
                    walk(node.id)

        walk(None)
        self._rows = rows

    @property
    def names(self) -> list[str]:
        return [n.name for n in self._rows]

    @property
    def row_count(self) -> int:
        return len(self._rows)

    def select_row(self, index: int) -> None:
        self.events.append(("select", index))
        self.selected = index

    def get_selected_node(self) -> CollectionNode | None:
        if self.selected is None:
            return None
        return self._rows[self.selected]

    def is_container_row(self, index: int) -> bool:
        return bool(self.store.children(self._rows[index].id))

    def is_container_expanded(self, index: int) -> bool:
        return self._rows[index].id in self.expanded

    def toggle_container_open(self, index: int) -> None:
        self.events.append(("toggle", index))
        self.pending.append(self._rows[index].id)

    async def settle(self) -> None:
        self.settle_count += 1
        for node_id in self.pending:
            self.expanded ^= {node_id}
        self.pending.clear()
        self._rebuild()

    async def load(self) -> None:
        self.load_count += 1
        self._rebuild()


class FakePreferences:
    """Dict-backed preference store."""

    def __init__(self, values: dict[str, str] | None = None) -> None:
        self.values: dict[str, str] = dict(values or {})

    def get_string(self, key: str, fallback: str) -> str:
        return self.values.get(key, fallback)

    def set_string(self, key: str, value: str) -> None:
        self.values[key] = value
