import logging
from typing import List

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import Container
from api.schemas import DataDto
from api.services import DataService
from src.errors import RecordNotFound

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[DataDto])
@router.get("/", response_model=List[DataDto], include_in_schema=False)
@inject
async def get_all(
    service: DataService = Depends(Provide[Container.service]),
):
    """
    List the seeded sample records, ordered by id.
    """
    try:
        data = await service.get_all()
    except Exception as e:
        logger.error("Listing data failed: %s", e)
        raise HTTPException(status_code=500, detail=str(e))
    return [DataDto.from_data(d) for d in data]


@router.get("/{record_id}", response_model=DataDto)
@inject
async def get_one(
    record_id: int,
    service: DataService = Depends(Provide[Container.service]),
):
    try:
        data = await service.get(record_id)
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error("Fetching data %d failed: %s", record_id, e)
        raise HTTPException(status_code=500, detail=str(e))
    return DataDto.from_data(data)


@router.get("/{record_id}/{other_id}", response_model=List[DataDto])
@inject
async def get_pair(
    record_id: int,
    other_id: int,
    service: DataService = Depends(Provide[Container.service]),
    other_service: DataService = Depends(Provide[Container.service]),
):
    """
    Fetch two records, each through its own per-request service instance.
    """
    try:
        first = await service.get(record_id)
        second = await other_service.get(other_id)
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error("Fetching data pair (%d, %d) failed: %s", record_id, other_id, e)
        raise HTTPException(status_code=500, detail=str(e))
    return [DataDto.from_data(first), DataDto.from_data(second)]
