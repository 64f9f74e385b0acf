"""Open the collection database."""

import sqlite3
from pathlib import Path

from loguru import logger

from daily_folder.config import DB_FILENAME
from daily_folder.core.database.schema import migrate_schema


def open_database(data_dir: Path) -> sqlite3.Connection:
    """Open (creating if needed) the collection database under data_dir."""
    data_dir.mkdir(parents=True, exist_ok=True)
    db_path = data_dir / DB_FILENAME
    conn = sqlite3.connect(str(db_path))
    migrate_schema(conn)
    logger.debug("Opened collection database {}", db_path)
    return conn
