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
DB_NAME: str = os.getenv("DB_NAME", "postgres")
DB_USER: str = os.getenv("DB_USER", "service_role")
DB_PASS: str = os.getenv("DB_PASS", "")

# A full connection string (e.g. the Supabase service-role URI) wins
# over the individual DB_* settings.
DATABASE_URL: str = os.getenv("DATABASE_URL") or (
    f"postgresql://{DB_USER}:{DB_PASS}@{DB_HOST}:{DB_PORT}/{DB_NAME}"
)

# ── Jobs ──────────────────────────────────────────────────
JOB_MAX_WORKERS: int = int(os.getenv("JOB_MAX_WORKERS", "4"))
JOB_DEADLINE_SECONDS: float = float(os.getenv("JOB_DEADLINE_SECONDS", "240"))

# Every schedule worker holds one connection, plus one for the listing query.
DB_POOL_MIN: int = int(os.getenv("DB_POOL_MIN", "1"))
DB_POOL_MAX: int = max(int(os.getenv("DB_POOL_MAX", "5")), JOB_MAX_WORKERS + 1)
DB_POOL_TIMEOUT_SECONDS: float = float(os.getenv("DB_POOL_TIMEOUT_SECONDS", "30"))

# ── HTTP API ──────────────────────────────────────────────
API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
API_PORT: int = int(os.getenv("API_PORT", "8000"))

CORS_ALLOW_ORIGINS: list[str] = ["*"]
CORS_ALLOW_METHODS: list[str] = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
CORS_ALLOW_HEADERS: list[str] = ["Content-Type", "Authorization", "X-Client-Info", "Apikey"]

# ── Logging ───────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# ── Currency ──────────────────────────────────────────────
CURRENCY_SYMBOL: str = "$"
