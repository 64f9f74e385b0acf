"""Tests for domain models."""

import pytest

from daily_folder.models.node import CollectionNode, DatePath, ScanResult


def test_collection_node_is_frozen() -> None:
    node = CollectionNode(id=1, name="2025", parent_id=None, library_scope="user")
    with pytest.raises(AttributeError):
        node.name = "changed"  # type: ignore[misc]


def test_collection_nodes_compare_by_value() -> None:
    a = CollectionNode(id=3, name="2025-03", parent_id=2, library_scope="user")
    b = CollectionNode(id=3, name="2025-03", parent_id=2, library_scope="user")
    assert a == b
    assert len({a, b}) == 1


def test_date_path_iterates_root_to_leaf() -> None:
    path = DatePath(root="Daily Folder", year="2025", month="2025-03", day="2025-03-07")
    assert list(path) == ["Daily Folder", "2025", "2025-03", "2025-03-07"]
    assert path.segments[-1] == path.day


def test_scan_result_defaults_to_no_index() -> None:
    assert ScanResult(found=False) == ScanResult(found=False, index=-1)
