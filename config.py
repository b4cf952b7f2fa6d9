"""
config.py
---------
Central configuration module. Loads all environment variables
from the .env file and exposes them as typed constants.
"""

import os
from dotenv import load_dotenv

load_dotenv()


# ── PostgreSQL ────────────────────────────────────────────
DB_HOST: str = os.getenv("DB_HOST", "localhost")
DB_PORT: int = int(os.getenv("DB_PORT", "5432"))
DB_NAME: str = os.getenv("DB_NAME", "lightbnb")
DB_USER: str = os.getenv("DB_USER", "lightbnb_user")
DB_PASS: str = os.getenv("DB_PASS", "")

DATABASE_URL: str = (
    f"postgresql://{DB_USER}:{DB_PASS}@{DB_HOST}:{DB_PORT}/{DB_NAME}"
)

DB_POOL_MIN: int = int(os.getenv("DB_POOL_MIN", "1"))
DB_POOL_MAX: int = int(os.getenv("DB_POOL_MAX", "5"))

# ── Logging ───────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
