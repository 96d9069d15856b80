"""
Pydantic models for the sample data API.
"""

from pydantic import BaseModel, ConfigDict

from src.models import Data


class DataDto(BaseModel):
    """
    Wire shape of a sample record.
    """
    id: int
    name: str

    model_config = ConfigDict(json_schema_extra={
        "example": {"id": 1, "name": "alpha"}
    })

    @classmethod
    def from_data(cls, data: Data) -> "DataDto":
        return cls(id=data.id, name=data.name)


class HealthResponse(BaseModel):
    status: str
    service: str
