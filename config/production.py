import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "break_tracker"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

DEFAULT_USER_ID = int(os.getenv("DEFAULT_USER_ID", "1"))
TICK_SECONDS = float(os.getenv("TICK_SECONDS", "1"))
AUTO_START_BREAKS = bool(int(os.getenv("AUTO_START_BREAKS", "1")))
POST_SHIFT_POLICY = os.getenv("POST_SHIFT_POLICY", "resolve")
BACKGROUND_TICKER = bool(int(os.getenv("BACKGROUND_TICKER", "0")))
