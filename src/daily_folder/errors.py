"""Exception types raised inside the daily-folder core."""


class DailyFolderError(Exception):
    """Base class for daily-folder errors."""


class PersistenceError(DailyFolderError):
    """The collection store could not persist a new collection."""


class LookupFailure(DailyFolderError):
    """A query against the collection store failed."""


class CreationFailed(DailyFolderError):
    """A missing path segment could not be created."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Cannot create collection: {name}")
        self.name = name


class NavigationIncomplete(DailyFolderError):
    """The tree view has no row for one of the chain's segments."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Tree view row not found: {name}")
        self.name = name
