from typing import Annotated, Optional

import httpx
from fastapi import APIRouter, Depends, Query

from metadata_api.api.deps import get_http_client, get_metadata_service
from metadata_api.schemas import MetadataRead, SingleMetadataRead
from metadata_api.services.metadata import MetadataService

router = APIRouter(prefix="/metadata", tags=["metadata"])


@router.get("", response_model=None)
async def read_metadata(
    service: Annotated[MetadataService, Depends(get_metadata_service)],
    client: Annotated[httpx.AsyncClient, Depends(get_http_client)],
    url: Annotated[Optional[str], Query(description="Page to unfurl")] = None,
) -> MetadataRead | SingleMetadataRead:
    """Fetch a page and return its title, description, icons and preview images."""
    return await service.fetch_metadata(client, url)
