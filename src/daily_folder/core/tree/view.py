"""Row-indexed collection tree view with lazily materialized child rows."""

import asyncio

from loguru import logger

from daily_folder.config import SETTLE_DELAY
from daily_folder.models.node import CollectionNode
from daily_folder.protocols import StoreProtocol


class CollectionTreeView:
    """Depth-first row projection of a scope's collection tree.

    Only roots and the children of expanded rows are visible. Expanding or
    collapsing a row rebuilds the rows on the next event loop iteration, so a
    caller scanning rows after a toggle has to `await settle()` first.
    """

    def __init__(
        self,
        store: StoreProtocol,
        scope: str,
        *,
        settle_delay: float = SETTLE_DELAY,
    ) -> None:
        self._store = store
        self._scope = scope
        self._settle_delay = settle_delay
        self._children: dict[int | None, list[CollectionNode]] = {}
        self._expanded: set[int] = set()
        self._rows: list[tuple[int, CollectionNode]] = []
        self._selected_id: int | None = None

    async def load(self) -> None:
        """(Re)read the scope's collections from the store, keeping expansion state."""
        children: dict[int | None, list[CollectionNode]] = {}
        todo: list[CollectionNode] = list(await self._store.query_roots_by_scope(self._scope))
        children[None] = list(todo)
        while todo:
            node = todo.pop()
            kids = await self._store.query_children_by_parent(node.id)
            if kids:
                children[node.id] = kids
                todo.extend(kids)

        self._children = children
        known = {n.id for nodes in children.values() for n in nodes}
        self._expanded &= known
        self._rebuild_rows()
        logger.debug("Tree view loaded {} collections in scope {}", len(known), self._scope)

    def _rebuild_rows(self) -> None:
        rows: list[tuple[int, CollectionNode]] = []
        stack: list[tuple[int, CollectionNode]] = [
            (0, n) for n in reversed(self._children.get(None, []))
        ]
        while stack:
            depth, node = stack.pop()
            rows.append((depth, node))
            if node.id in self._expanded:
                stack.extend((depth + 1, c) for c in reversed(self._children.get(node.id, [])))
        self._rows = rows

        if self._selected_id is not None and not any(
            n.id == self._selected_id for _, n in rows
        ):
            self._selected_id = None

    def rows(self) -> list[tuple[int, CollectionNode]]:
        """Return the visible rows as (depth, node) pairs."""
        return list(self._rows)

    @property
    def scope(self) -> str:
        return self._scope

    @property
    def row_count(self) -> int:
        return len(self._rows)

    def select_row(self, index: int) -> None:
        self._selected_id = self._rows[index][1].id

    def get_selected_node(self) -> CollectionNode | None:
        if self._selected_id is None:
            return None
        return next((n for _, n in self._rows if n.id == self._selected_id), None)

    def is_container_row(self, index: int) -> bool:
        return bool(self._children.get(self._rows[index][1].id))

    def is_container_expanded(self, index: int) -> bool:
        return self._rows[index][1].id in self._expanded

    def toggle_container_open(self, index: int) -> None:
        node_id = self._rows[index][1].id
        if node_id in self._expanded:
            self._expanded.discard(node_id)
        else:
            self._expanded.add(node_id)

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._rebuild_rows()
            return
        loop.call_soon(self._rebuild_rows)

    async def settle(self) -> None:
        await asyncio.sleep(self._settle_delay)
