"""Collect the date folders that already exist under the root collection."""

import re

from loguru import logger

from daily_folder.config import DATE_NAME_PATTERN
from daily_folder.protocols import StoreProtocol

_DATE_RE = re.compile(DATE_NAME_PATTERN)


async def refresh_existing(store: StoreProtocol, root_label: str, scope: str) -> set[str]:
    """Walk root -> years -> months -> days and return the day names found.

    Children whose names are not YYYY-MM-DD are skipped. A missing root yields
    an empty set, and so does any store error: a partial result would mark
    dates as missing that do exist.
    """
    existing: set[str] = set()
    try:
        roots = await store.query_roots_by_scope(scope)
        root = next((r for r in roots if r.name == root_label), None)
        if root is None:
            return existing

        for year in await store.query_children_by_parent(root.id):
            for month in await store.query_children_by_parent(year.id):
                for day in await store.query_children_by_parent(month.id):
                    if _DATE_RE.fullmatch(day.name):
                        existing.add(day.name)
    except Exception as e:
        logger.warning("Refreshing existing date folders under {} failed: {}", root_label, e)
        existing.clear()

    logger.debug("Found {} existing date folders under {}", len(existing), root_label)
    return existing
