"""Date-keyed collection folders and tree view navigation."""

from daily_folder.core.session import Session, SessionRegistry
from daily_folder.models.node import CollectionNode, DatePath
from daily_folder.protocols import PreferenceStoreProtocol, StoreProtocol, TreeViewProtocol
from daily_folder.service import DailyFolder

__all__ = [
    "CollectionNode",
    "DailyFolder",
    "DatePath",
    "PreferenceStoreProtocol",
    "Session",
    "SessionRegistry",
    "StoreProtocol",
    "TreeViewProtocol",
]
