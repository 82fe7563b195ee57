"""
config.py
---------
Central configuration module. Loads all environment variables
from the .env file and exposes them as typed constants.
"""

import os
from dotenv import load_dotenv

load_dotenv()


# ── PostgreSQL / PostGIS ──────────────────────────────────
DB_HOST: str = os.getenv("DB_HOST", "localhost")
DB_PORT: int = int(os.getenv("DB_PORT", "5432"))
DB_NAME: str = os.getenv("DB_NAME", "geoboard")
DB_USER: str = os.getenv("DB_USER", "geoboard")
DB_PASS: str = os.getenv("DB_PASS", "")

# A full DSN in DATABASE_URL wins over the individual DB_* parts.
DATABASE_URL: str = os.getenv("DATABASE_URL") or (
    f"postgresql://{DB_USER}:{DB_PASS}@{DB_HOST}:{DB_PORT}/{DB_NAME}"
)

# ── Connection pool ───────────────────────────────────────
DB_POOL_MIN: int = int(os.getenv("DB_POOL_MIN", "1"))
DB_POOL_MAX: int = int(os.getenv("DB_POOL_MAX", "5"))

# ── Queries ───────────────────────────────────────────────
# Radius in meters for "messages near a point" lookups.
NEAR_RADIUS_METERS: float = float(os.getenv("NEAR_RADIUS_METERS", "10000"))

# ── Logging ───────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
