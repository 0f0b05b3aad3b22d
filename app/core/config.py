# app/core/config.py

import os
from dotenv import load_dotenv
from sqlalchemy.engine import URL

load_dotenv()

# =====================================================
# APPLICATION
# =====================================================
APP_ENV = os.getenv("APP_ENV", "development")
if APP_ENV not in {"development", "staging", "production"}:
    raise ValueError("APP_ENV must be development | staging | production")

IS_PRODUCTION = APP_ENV == "production"

APP_NAME = "Inventory API"
APP_VERSION = os.getenv("APP_VERSION", "1.0.0")
PORT = int(os.getenv("PORT", 4000))

CORS_ORIGINS = [
    o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()
]

# =====================================================
# DATABASE
# =====================================================
DB_TYPE = os.getenv("DB_TYPE", "postgres")
if DB_TYPE not in {"postgres", "sqlite"}:
    raise ValueError("DB_TYPE must be postgres | sqlite")

DATABASE_URL = os.getenv("DATABASE_URL")

if DB_TYPE == "postgres":
    if not DATABASE_URL:
        DATABASE_URL = URL.create(
            "postgresql+asyncpg",
            username=os.getenv("POSTGRES_USER"),
            password=os.getenv("POSTGRES_PASSWORD"),
            host=os.getenv("POSTGRES_HOST", "localhost"),
            port=int(os.getenv("POSTGRES_PORT", 5432)),
            database=os.getenv("POSTGRES_DB"),
        ).render_as_string(hide_password=False)

elif DB_TYPE == "sqlite":
    if IS_PRODUCTION:
        raise ValueError("SQLite is NOT allowed in production")
    if not DATABASE_URL:
        DATABASE_URL = "sqlite+aiosqlite:///./inventory.db"

# ---- Pool (fixed capacity, bounded wait) ----
DB_POOL_SIZE = int(os.getenv("DB_POOL_SIZE", 20))
DB_POOL_TIMEOUT = int(os.getenv("DB_POOL_TIMEOUT", 5))
DB_ECHO_POOL = os.getenv("DB_ECHO_POOL", "false").lower() == "true"

# ---- SSL ----
DB_SSL = os.getenv("DB_SSL", "false").lower() == "true"
DB_SSL_VERIFY = os.getenv("DB_SSL_VERIFY", "true").lower() == "true"
