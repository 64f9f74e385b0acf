"""Drive a tree view to expand and select a resolved collection chain."""

from collections.abc import Sequence

from loguru import logger

from daily_folder.errors import NavigationIncomplete
from daily_folder.models.node import CollectionNode, ScanResult
from daily_folder.protocols import TreeViewProtocol


class TreeNavigator:
    """Select a Root/Year/Month/Day chain row by row in a tree view."""

    def __init__(self, view: TreeViewProtocol) -> None:
        self._view = view

    def _select_matches(self, index: int, name: str) -> bool:
        self._view.select_row(index)
        selected = self._view.get_selected_node()
        return selected is not None and selected.name == name

    async def find_and_expand(self, name: str, start_index: int = 0) -> ScanResult:
        """Scan rows from start_index for `name`, expanding the match.

        Each row is selected and read back, since the view only exposes the
        selected collection. A collapsed container is expanded and the view
        given time to settle before the result is returned.
        """
        logger.debug("Scanning for '{}' from index {}...", name, start_index)
        view = self._view
        for i in range(start_index, view.row_count):
            if not self._select_matches(i, name):
                continue
            logger.debug("Found '{}' at index {}.", name, i)
            if view.is_container_row(i) and not view.is_container_expanded(i):
                logger.debug("Expanding '{}'...", name)
                view.toggle_container_open(i)
                await view.settle()
            return ScanResult(found=True, index=i)

        logger.debug("Failed to find '{}'.", name)
        return ScanResult(found=False)

    async def navigate_to_chain(self, chain: Sequence[CollectionNode]) -> CollectionNode:
        """Expand root, year and month rows, then select the day row.

        Each scan starts right after the previous match: once a row is
        expanded its descendants follow it in row order, so a same-named
        collection elsewhere in the tree is never picked.

        Raises:
            NavigationIncomplete: A segment has no row; the last successful
                selection is left in place.
        """
        *containers, leaf = chain
        start = 0
        for node in containers:
            result = await self.find_and_expand(node.name, start)
            if not result.found:
                raise NavigationIncomplete(node.name)
            start = result.index + 1

        logger.debug("Scanning for final target '{}'...", leaf.name)
        for i in range(start, self._view.row_count):
            if self._select_matches(i, leaf.name):
                logger.info("Success! '{}' selected.", leaf.name)
                return leaf
        raise NavigationIncomplete(leaf.name)
