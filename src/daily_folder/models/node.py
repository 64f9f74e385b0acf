"""Domain models for daily-folder."""

from collections.abc import Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class CollectionNode:
    """A named collection owned by the collection store."""

    id: int
    name: str
    parent_id: int | None
    library_scope: str


@dataclass(frozen=True)
class DatePath:
    """The four segment names leading from the root to a date leaf."""

    root: str
    year: str
    month: str
    day: str

    @property
    def segments(self) -> tuple[str, str, str, str]:
        return (self.root, self.year, self.month, self.day)

    def __iter__(self) -> Iterator[str]:
        return iter(self.segments)


@dataclass(frozen=True)
class ScanResult:
    """Outcome of scanning the tree view for one segment name."""

    found: bool
    index: int = -1
