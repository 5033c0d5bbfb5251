import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "break_tracker"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Apply database/schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

DEFAULT_USER_ID = int(os.getenv("DEFAULT_USER_ID", "1"))
TICK_SECONDS = float(os.getenv("TICK_SECONDS", "1"))
AUTO_START_BREAKS = bool(int(os.getenv("AUTO_START_BREAKS", "1")))
# "resolve" re-reads the shift config after a shift ends; "extrapolate" adds 24h
POST_SHIFT_POLICY = os.getenv("POST_SHIFT_POLICY", "resolve")
BACKGROUND_TICKER = bool(int(os.getenv("BACKGROUND_TICKER", "1")))
