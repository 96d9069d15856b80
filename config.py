"""
Configuration for the sample data API.
Database, pool, server, dev-task and seed defaults.
"""

import os

# ──────────────────────────────────────────────
# Database
# Fixed local credentials baked into the Dockerfile image.
# ──────────────────────────────────────────────
DB_HOST     = "127.0.0.1"
DB_PORT     = 45432          # host port mapped onto the container's 5432
DB_NAME     = "docker"
DB_USER     = "docker"
DB_PASSWORD = "docker"

DEFAULT_DATABASE_URL = (
    f"postgresql+psycopg://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}"
)
DATABASE_URL = os.environ.get("DATABASE_URL", DEFAULT_DATABASE_URL)

# Connection pool (owned by SQLAlchemy)
DB_POOL_SIZE    = int(os.environ.get("DB_POOL_SIZE", "5"))
DB_MAX_OVERFLOW = int(os.environ.get("DB_MAX_OVERFLOW", "10"))
DB_POOL_TIMEOUT = float(os.environ.get("DB_POOL_TIMEOUT", "30"))
DB_ECHO         = os.environ.get("DB_ECHO", "false").lower() in ("1", "true", "yes", "on")

QUERY_LIMIT = 50             # rows returned by the list endpoint

# ──────────────────────────────────────────────
# HTTP server
# ──────────────────────────────────────────────
API_HOST = "127.0.0.1"
API_PORT = 8000
SERVICE_NAME = "coi-fastapi-sample"

# ──────────────────────────────────────────────
# Logging
# ──────────────────────────────────────────────
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
LOG_JSON  = os.environ.get("LOG_JSON", "true").lower() in ("1", "true", "yes", "on")

# ──────────────────────────────────────────────
# Dev task (docker image + seeding)
# ──────────────────────────────────────────────
DOCKER_COMMAND        = "docker"
DOCKER_IMAGE_NAME     = "coi-fastapi-sample-postgres"
CONTAINER_PORT        = 5432
STARTUP_WAIT_SECONDS  = 5    # time given to postgres to accept connections

PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))

# Fixed sample rows written by the seed step: (id, name)
SEED_ROWS = [
    (1, "alpha"),
    (2, "bravo"),
    (3, "charlie"),
    (4, "delta"),
    (5, "echo"),
]


def container_settings() -> dict:
    """Settings tree loaded into the DI container's Configuration provider."""
    return {
        "database": {
            "url":          DATABASE_URL,
            "pool_size":    DB_POOL_SIZE,
            "max_overflow": DB_MAX_OVERFLOW,
            "pool_timeout": DB_POOL_TIMEOUT,
            "echo":         DB_ECHO,
        },
        "query_limit": QUERY_LIMIT,
    }
