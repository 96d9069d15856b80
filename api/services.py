"""
Service layer for the sample data API.
Wraps the repository, moving blocking queries onto the threadpool.
"""

from typing import List

from fastapi.concurrency import run_in_threadpool

from src.errors import RecordNotFound, RepositoryError, ServiceError
from src.models import Data
from src.repository import DataRepository


class DataService:
    def __init__(self, repository: DataRepository):
        self._repository = repository

    async def get(self, record_id: int) -> Data:
        """
        Fetch a single record. RecordNotFound propagates unchanged.
        """
        try:
            row = await run_in_threadpool(self._repository.get, record_id)
        except RecordNotFound:
            raise
        except RepositoryError as e:
            raise ServiceError(f"Error calling repository: {e}") from e
        return Data.from_db(row)

    async def get_all(self) -> List[Data]:
        try:
            rows = await run_in_threadpool(self._repository.get_all)
        except RepositoryError as e:
            raise ServiceError(f"Error calling repository: {e}") from e
        return [Data.from_db(row) for row in rows]
