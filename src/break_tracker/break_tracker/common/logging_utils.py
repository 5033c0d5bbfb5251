import logging
from typing import Optional


def setup_logger(
    name: str,
    level: int = logging.INFO,
    handler_level: Optional[int] = None,
) -> logging.Logger:
    """Configure and return a named logger with a single console handler."""
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not logger.handlers:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        console_handler = logging.StreamHandler()
        console_handler.setLevel(handler_level or level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    return logger
