"""Terminal countdown: the service layer driven by the ticker, without Flask.

Prints the header countdown once per second until Ctrl+C.
"""

import importlib
import time

from config import get_settings_module

from src.break_tracker.break_tracker.common.logging_utils import setup_logger
from src.break_tracker.break_tracker.container import build_container
from src.break_tracker.break_tracker.countdown.ticker import CountdownTicker


def main():
    setup_logger("break_tracker")
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)
    user_id = int(getattr(settings, "DEFAULT_USER_ID", 1))

    ticker = CountdownTicker(
        lambda now: container.countdown_service.snapshot(user_id, now=now).state,
        lambda state: print(f"\r{state.text or 'No schedule'}   ", end="", flush=True),
        interval=float(getattr(settings, "TICK_SECONDS", 1.0)),
    )
    ticker.start()
    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        pass
    finally:
        ticker.stop()
        print()


if __name__ == "__main__":
    main()
