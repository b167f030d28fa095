# backend/app/api/v1/endpoints/datasets.py
import logging
from typing import Dict, List

from fastapi import APIRouter, HTTPException, Depends

from ....models.datasets import LoadingStateResponse, DatasetInfo, LoadResponse, CacheClearResponse
from ....services.loader_service import LoaderService, get_loader, get_datasets
from .....core.ingestion.loading import DataLoadingManager
from .....core.datasets import DatasetDefinition

router = APIRouter()
logger = logging.getLogger(__name__)


def _require_dataset(source: str, datasets: Dict[str, DatasetDefinition]) -> DatasetDefinition:
    definition = datasets.get(source)
    if definition is None:
        raise HTTPException(
            status_code=404,
            detail=f"Unknown dataset: {source}"
        )
    return definition


@router.get("/", response_model=List[DatasetInfo])
async def list_datasets(
        loader: DataLoadingManager = Depends(get_loader),
        datasets: Dict[str, DatasetDefinition] = Depends(get_datasets)
):
    """Registered datasets with their loading state"""
    return [LoaderService.describe(loader, definition) for definition in datasets.values()]


@router.delete("/cache", response_model=CacheClearResponse)
async def clear_all_caches(loader: DataLoadingManager = Depends(get_loader)):
    loader.clear_all_caches()
    return CacheClearResponse(success=True, message="All data caches cleared")


@router.get("/{source}/state", response_model=LoadingStateResponse)
async def dataset_state(
        source: str,
        loader: DataLoadingManager = Depends(get_loader),
        datasets: Dict[str, DatasetDefinition] = Depends(get_datasets)
):
    _require_dataset(source, datasets)
    return LoaderService.state_of(loader, source)


@router.post("/{source}/load", response_model=LoadResponse)
async def load_dataset(
        source: str,
        loader: DataLoadingManager = Depends(get_loader),
        datasets: Dict[str, DatasetDefinition] = Depends(get_datasets)
):
    """
    Loads a dataset (served from cache when already loaded).

    Failures are reported in the body, not as HTTP errors.
    """
    definition = _require_dataset(source, datasets)
    logger.info(f"Load requested for {source}")
    return await LoaderService.load_dataset(loader, definition)


@router.delete("/{source}/cache", response_model=CacheClearResponse)
async def clear_dataset_cache(
        source: str,
        loader: DataLoadingManager = Depends(get_loader),
        datasets: Dict[str, DatasetDefinition] = Depends(get_datasets)
):
    definition = _require_dataset(source, datasets)
    loader.clear_cache(definition.source, definition.cache_key)
    return CacheClearResponse(success=True, message=f"Cache cleared for {source}")
