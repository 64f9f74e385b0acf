"""Resolve and create the Root/Year/Month/Day collection chain for a date."""

from loguru import logger

from daily_folder.errors import CreationFailed, LookupFailure
from daily_folder.models.node import CollectionNode, DatePath
from daily_folder.protocols import StoreProtocol


class HierarchyResolver:
    """Find or create date-folder chains through a collection store."""

    def __init__(self, store: StoreProtocol) -> None:
        self._store = store

    async def _children(self, parent_id: int | None, scope: str) -> list[CollectionNode]:
        """Return the children of parent_id in scope, or the scope's roots.

        Raises:
            LookupFailure: The store query failed.
        """
        try:
            if parent_id is None:
                nodes = await self._store.query_roots_by_scope(scope)
            else:
                nodes = await self._store.query_children_by_parent(parent_id)
        except Exception as e:
            raise LookupFailure(f"Querying children of {parent_id!r} failed: {e}") from e
        return [n for n in nodes if n.library_scope == scope]

    @staticmethod
    def _find(nodes: list[CollectionNode], name: str) -> CollectionNode | None:
        return next((n for n in nodes if n.name == name), None)

    async def ensure_segment(
        self, name: str, parent_id: int | None, scope: str
    ) -> CollectionNode:
        """Return the child named `name` under parent_id, creating it if missing.

        A failed lookup does not block creation: the error is logged and the
        segment is created as if it were missing.

        Args:
            name: Segment name.
            parent_id: Parent collection id, or None for a scope root.
            scope: Library scope of the chain.

        Raises:
            CreationFailed: The store could not persist the new collection.
        """
        try:
            existing = self._find(await self._children(parent_id, scope), name)
        except LookupFailure as e:
            logger.warning("Error finding collection {}: {}; creating it instead", name, e)
        else:
            if existing is not None:
                return existing

        try:
            node = await self._store.create_and_persist(name, parent_id, scope)
        except Exception as e:
            logger.error("Error creating collection {}: {}", name, e)
            raise CreationFailed(name) from e

        logger.info("Created collection: {}", name)
        return node

    async def resolve_path(
        self, path: DatePath, scope: str
    ) -> list[CollectionNode] | None:
        """Look up the four-node chain for path without creating anything.

        Returns:
            [root, year, month, day] when every segment exists, else None.
        """
        chain: list[CollectionNode] = []
        parent_id: int | None = None
        for name in path:
            try:
                node = self._find(await self._children(parent_id, scope), name)
            except LookupFailure as e:
                logger.warning("Lookup of {} failed, treating as not found: {}", name, e)
                return None
            if node is None:
                logger.debug("Segment {} not found under {}", name, parent_id)
                return None
            chain.append(node)
            parent_id = node.id
        return chain

    async def ensure_path(self, path: DatePath, scope: str) -> CollectionNode:
        """Ensure all four segments exist, strictly top-down, and return the leaf.

        Raises:
            CreationFailed: A segment could not be created; later segments
                are not attempted.
        """
        node = await self.ensure_segment(path.root, None, scope)
        for name in (path.year, path.month, path.day):
            node = await self.ensure_segment(name, node.id, scope)
        return node
