"""Key-value preferences stored in the metadata table."""

import sqlite3

from loguru import logger

from daily_folder.core.database.schema import get_metadata, set_metadata

_PREF_PREFIX = "pref."


class SqlitePreferences:
    """Preference store backed by the archive's metadata table."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def get_string(self, key: str, fallback: str) -> str:
        try:
            value = get_metadata(self._conn, _PREF_PREFIX + key)
        except sqlite3.Error:
            logger.warning("Failed to read pref {}, using fallback", key)
            return fallback
        return fallback if value is None else value

    def set_string(self, key: str, value: str) -> None:
        try:
            set_metadata(self._conn, _PREF_PREFIX + key, value)
        except sqlite3.Error as e:
            logger.error("Failed to set pref {}: {}", key, e)
