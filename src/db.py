"""
Database layer — schema, engine construction and seeding.

The engine owns the connection pool; its size, checkout and blocking on
exhaustion are handled by SQLAlchemy. PostgreSQL in production, in-memory
SQLite in tests.
"""

import logging
from typing import Iterable, Iterator, Optional, Sequence, Tuple

from sqlalchemy import (
    BigInteger, Column, Integer, MetaData, Table, Text, create_engine, insert,
)
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool

from config import SEED_ROWS
from src.errors import SeedError
from src.observability import SEEDED_ROWS

logger = logging.getLogger(__name__)


metadata = MetaData()

data_table = Table(
    "data",
    metadata,
    # SQLite only autoincrements INTEGER primary keys
    Column("id", BigInteger().with_variant(Integer, "sqlite"), primary_key=True),
    Column("name", Text, nullable=False),
)


def create_db_engine(
    url: str,
    pool_size: int = 5,
    max_overflow: int = 10,
    pool_timeout: float = 30.0,
    echo: bool = False,
) -> Engine:
    """Build an engine for ``url``.

    SQLite URLs get a single shared connection so an in-memory database
    survives across pool checkouts and threads.
    """
    if url.startswith("sqlite"):
        return create_engine(
            url,
            echo=echo,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    return create_engine(
        url,
        echo=echo,
        pool_size=pool_size,
        max_overflow=max_overflow,
        pool_timeout=pool_timeout,
        pool_pre_ping=True,
    )


def engine_resource(
    url: str,
    pool_size: int = 5,
    max_overflow: int = 10,
    pool_timeout: float = 30.0,
    echo: bool = False,
) -> Iterator[Engine]:
    """Generator form of :func:`create_db_engine`; disposes the pool on shutdown."""
    engine = create_db_engine(url, pool_size, max_overflow, pool_timeout, echo)
    logger.info("Database engine created for %s", engine.url.render_as_string(hide_password=True))
    try:
        yield engine
    finally:
        engine.dispose()
        logger.info("Database engine disposed")


def init_schema(engine: Engine) -> None:
    """Create the ``data`` table if it does not exist."""
    try:
        metadata.create_all(engine)
    except SQLAlchemyError as e:
        logger.error("Schema creation failed: %s", e)
        raise SeedError(f"Failed to initialize database schema: {e}") from e
    logger.info("Database schema ready")


def seed(engine: Engine, rows: Optional[Iterable[Tuple[int, str]]] = None) -> int:
    """
    Insert the fixed sample rows. Returns the number of rows written.

    Meant to run once per fresh database; a second run violates the
    primary key and raises SeedError.
    """
    records: Sequence[dict] = [
        {"id": record_id, "name": name}
        for record_id, name in (SEED_ROWS if rows is None else rows)
    ]
    if not records:
        return 0

    try:
        with engine.begin() as conn:
            conn.execute(insert(data_table), records)
    except SQLAlchemyError as e:
        logger.error("Seeding failed: %s", e)
        raise SeedError(f"Failed to seed sample data: {e}") from e

    SEEDED_ROWS.inc(len(records))
    logger.info("Seeded %d rows", len(records))
    return len(records)
