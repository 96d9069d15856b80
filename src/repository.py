"""
Repository — data-access shim over the ``data`` table.

``DataRepository`` is the capability handlers depend on; the DI container
binds it to ``SqlDataRepository`` at startup.
"""

import logging
from abc import ABC, abstractmethod
from typing import List

from sqlalchemy import select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from config import QUERY_LIMIT
from src.db import data_table
from src.errors import RecordNotFound, RepositoryError
from src.models import DbData
from src.observability import QUERY_DURATION, QUERY_ERRORS

logger = logging.getLogger(__name__)


class DataRepository(ABC):

    @abstractmethod
    def get(self, record_id: int) -> DbData:
        """Return the row with ``record_id``; raise RecordNotFound if absent."""

    @abstractmethod
    def get_all(self) -> List[DbData]:
        """Return up to the configured limit of rows, ordered by id."""


class SqlDataRepository(DataRepository):
    def __init__(self, engine: Engine, limit: int = QUERY_LIMIT):
        self._engine = engine
        self._limit = limit

    def get(self, record_id: int) -> DbData:
        stmt = (
            select(data_table.c.id, data_table.c.name)
            .where(data_table.c.id == record_id)
        )
        rows = self._fetch("get", stmt)
        if not rows:
            raise RecordNotFound(record_id)
        return rows[0]

    def get_all(self) -> List[DbData]:
        stmt = (
            select(data_table.c.id, data_table.c.name)
            .order_by(data_table.c.id)
            .limit(self._limit)
        )
        return self._fetch("get_all", stmt)

    def _fetch(self, operation: str, stmt) -> List[DbData]:
        with QUERY_DURATION.labels(operation=operation).time():
            try:
                with self._engine.connect() as conn:
                    result = conn.execute(stmt).all()
            except SQLAlchemyError as e:
                QUERY_ERRORS.labels(operation=operation).inc()
                logger.error("Repository %s failed: %s", operation, e)
                raise RepositoryError(f"{operation} query failed: {e}") from e
        return [DbData(id=row.id, name=row.name) for row in result]
