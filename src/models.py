"""
Domain records for the sample data set.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class DbData:
    """A row of the ``data`` table as read by the repository."""
    id: int
    name: str


@dataclass(frozen=True)
class Data:
    id: int
    name: str

    @classmethod
    def from_db(cls, row: DbData) -> "Data":
        return cls(id=row.id, name=row.name)
