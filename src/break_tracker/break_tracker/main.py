from __future__ import annotations

import atexit
import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.logging_utils import setup_logger
from .container import Container, build_container
from .countdown.controller import register as register_countdown
from .countdown.ticker import CountdownTicker
from .database.bootstrap import apply_schema, list_tables


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["DEFAULT_USER_ID"] = int(getattr(settings, "DEFAULT_USER_ID", 1))
    app.config["TICK_SECONDS"] = float(getattr(settings, "TICK_SECONDS", 1.0))

    log_level = getattr(logging, str(getattr(settings, "LOG_LEVEL", "INFO")).upper(), logging.INFO)
    logger = setup_logger("break_tracker", level=log_level)
    logger.info("settings=%s", settings_module)

    if container is None:
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            apply_schema(db_config, schema_path=schema_path)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

        container = build_container(
            db_config=db_config,
            auto_start_breaks=bool(getattr(settings, "AUTO_START_BREAKS", True)),
            post_shift_policy=str(getattr(settings, "POST_SHIFT_POLICY", "resolve")),
        )

    app.extensions["break_tracker"] = container
    register_countdown(app, container)

    if bool(getattr(settings, "BACKGROUND_TICKER", False)):
        start_background_ticker(app, container)

    return app


def start_background_ticker(app: Flask, container: Container) -> CountdownTicker:
    """Evaluate the default user's countdown every tick so alerts fire without a browser."""
    user_id = app.config["DEFAULT_USER_ID"]
    ticker = CountdownTicker(
        lambda now: container.countdown_service.snapshot(user_id, now=now, channel="ticker").state,
        interval=app.config["TICK_SECONDS"],
        clock=container.clock,
    )
    ticker.start()
    atexit.register(ticker.stop, 2.0)
    app.extensions["break_tracker_ticker"] = ticker
    return ticker
