"""Configuration constants for daily-folder."""

import os
from pathlib import Path

# Name of the top-level collection all date folders live under.
DEFAULT_ROOT_LABEL: str = "Daily Folder"

# Preference key holding a user-chosen root label.
ROOT_LABEL_PREF_KEY: str = "root_collection_name"

# Library scope used when the caller does not pick one.
DEFAULT_SCOPE: str = "user"

# Session id used by single-window callers (CLI, MCP server).
DEFAULT_SESSION: str = "main"

# Seconds to wait after expanding a tree row so child rows can materialize.
SETTLE_DELAY: float = 0.25

# Leaf name pattern, YYYY-MM-DD with ASCII digits; use with re.fullmatch.
DATE_NAME_PATTERN: str = r"[0-9]{4}-[0-9]{2}-[0-9]{2}"

# Archive location when DAILY_FOLDER_DIR is not set.
DEFAULT_DATA_DIR: Path = Path("~/.local/share/daily-folder").expanduser()

DB_FILENAME: str = "daily-folder.db"


def resolve_data_directory() -> Path:
    """Return the data directory, honouring the DAILY_FOLDER_DIR override."""
    override = os.environ.get("DAILY_FOLDER_DIR")
    if override:
        return Path(override).expanduser()
    return DEFAULT_DATA_DIR
