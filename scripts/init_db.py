from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.break_tracker.break_tracker.common.logging_utils import setup_logger
from src.break_tracker.break_tracker.database.bootstrap import apply_schema, list_tables
from src.break_tracker.break_tracker.database.connection import DBConfig


def main() -> None:
    logger = setup_logger("break_tracker")
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
    tables = list_tables(db_config)
    logger.info("schema applied to %s (tables=%d)", DBConfig.from_dict(db_config).describe(), len(tables))


if __name__ == "__main__":
    main()
