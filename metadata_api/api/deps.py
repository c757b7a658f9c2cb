from collections.abc import AsyncIterator
from functools import lru_cache

import httpx
from fastapi import Depends

from metadata_api.config import settings
from metadata_api.services.metadata import FetchConfig, MetadataService


@lru_cache()
def get_metadata_service() -> MetadataService:
    config = FetchConfig(user_agent=settings.user_agent, timeout=settings.fetch_timeout)
    return MetadataService(config, shape=settings.metadata_shape)


async def get_http_client(
    service: MetadataService = Depends(get_metadata_service),
) -> AsyncIterator[httpx.AsyncClient]:
    """Per-request HTTP client, closed once the response is sent."""
    async with service.build_client() as client:
        yield client
