# backend/app/services/loader_service.py
import asyncio
import logging
from typing import Dict, List

from fastapi import Request

from ..core.config import Settings
from ..models.datasets import LoadingStateResponse, DatasetInfo, LoadResponse
from ...core.ingestion.loading import DataLoadingManager
from ...core.datasets import DatasetDefinition, DEFAULT_DATASETS

logger = logging.getLogger(__name__)


def build_loader(settings: Settings) -> DataLoadingManager:
    """Application-owned loader configured from settings."""
    return DataLoadingManager(
        base_url=settings.DATA_BASE_URL,
        default_retries=settings.LOAD_RETRIES,
        default_timeout_ms=settings.LOAD_TIMEOUT_MS,
        backoff_ms=settings.RETRY_BACKOFF_MS
    )


def get_loader(request: Request) -> DataLoadingManager:
    return request.app.state.loader


def get_datasets() -> Dict[str, DatasetDefinition]:
    return DEFAULT_DATASETS


class LoaderService:

    @staticmethod
    def state_of(loader: DataLoadingManager, source: str) -> LoadingStateResponse:
        state = loader.get_loading_state(source)
        return LoadingStateResponse(
            source=source,
            status=state.status,
            is_loading=state.is_loading,
            is_loaded=state.is_loaded,
            error=state.error,
            last_updated=state.last_updated
        )

    @staticmethod
    def describe(loader: DataLoadingManager, definition: DatasetDefinition) -> DatasetInfo:
        cache_key = definition.cache_key or definition.source
        return DatasetInfo(
            source=definition.source,
            path=definition.path,
            skip_header_lines=definition.skip_header_lines,
            cached=loader.get_cached_data(cache_key) is not None,
            state=LoaderService.state_of(loader, definition.source)
        )

    @staticmethod
    async def load_dataset(loader: DataLoadingManager, definition: DatasetDefinition) -> LoadResponse:
        """
        Loads a registered dataset through the shared loader.

        Args:
            loader: Application loader
            definition: Dataset to load
        """
        result = await loader.load(
            definition.source,
            definition.path,
            definition.row_parser,
            skip_header_lines=definition.skip_header_lines,
            cache_key=definition.cache_key,
            empty_factory=definition.empty_factory
        )

        if result.errors:
            logger.error(f"Errors loading {definition.source}: {result.errors}")
        if result.warnings:
            logger.warning(f"Warnings loading {definition.source}: {result.warnings}")

        return LoadResponse(
            source=definition.source,
            success=loader.is_data_loaded(definition.source),
            errors=result.errors,
            warnings=result.warnings,
            state=LoaderService.state_of(loader, definition.source),
            data=result.data
        )

    @staticmethod
    async def preload(loader: DataLoadingManager, datasets: Dict[str, DatasetDefinition]) -> List[LoadResponse]:
        """Loads every dataset concurrently."""
        logger.info(f"Preloading datasets: {list(datasets)}")
        return list(await asyncio.gather(*[
            LoaderService.load_dataset(loader, definition)
            for definition in datasets.values()
        ]))
