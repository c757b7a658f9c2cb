import asyncio
import logging
from typing import Literal

import httpx
from pydantic import BaseModel, ConfigDict, ValidationError

from metadata_api.errors import FetchError, InvalidUrlError
from metadata_api.schemas import MetadataRead, SingleMetadataRead
from metadata_api.services import extraction
from metadata_api.utils.urls import url_adapter

logger = logging.getLogger(__name__)


class FetchConfig(BaseModel):
    """How target pages are fetched. Immutable once built."""

    user_agent: str = "Mozilla/5.0 (compatible; MetadataBot/1.0)"
    timeout: float = 10.0

    model_config = ConfigDict(frozen=True)


def parse_url(raw_url: str | None) -> str:
    """Validate ``raw_url`` as an absolute URL and return its canonical form."""
    if not raw_url:
        raise InvalidUrlError()
    try:
        return str(url_adapter.validate_python(raw_url))
    except ValidationError as e:
        raise InvalidUrlError() from e


class MetadataService:
    """Fetch a page and extract its link-preview metadata."""

    def __init__(
        self,
        config: FetchConfig,
        shape: Literal["multi", "single"] = "multi",
    ) -> None:
        self.config = config
        self.shape = shape

    def build_client(
        self, transport: httpx.AsyncBaseTransport | None = None
    ) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            headers={"User-Agent": self.config.user_agent},
            timeout=self.config.timeout,
            follow_redirects=True,
            transport=transport,
        )

    async def fetch_html(self, client: httpx.AsyncClient, url: str) -> str:
        """GET ``url`` and return the decoded body.

        The response status is not checked: error pages are parsed like any
        other page. Only transport failures and timeouts raise.
        """
        try:
            # client timeouts apply per operation; wait_for bounds the whole request
            resp = await asyncio.wait_for(client.get(url), timeout=self.config.timeout)
            return resp.text
        except asyncio.TimeoutError as e:
            logger.warning(f"Fetching {url} timed out after {self.config.timeout}s")
            raise FetchError() from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning(f"Fetching {url} failed: {e!r}")
            raise FetchError() from e

    def parse_metadata(
        self, html: str, url: str
    ) -> MetadataRead | SingleMetadataRead:
        document = extraction.parse_document(html)
        title = extraction.extract_title(document)
        description = extraction.extract_description(document)

        if self.shape == "single":
            return SingleMetadataRead(
                title=title,
                description=description,
                favicon=extraction.extract_favicon(document, url),
                preview_image=extraction.extract_preview_image(document, url),
                url=url,
            )
        return MetadataRead(
            title=title,
            description=description,
            favicons=extraction.extract_favicons(document, url),
            preview_images=extraction.extract_preview_images(document, url),
            url=url,
        )

    async def fetch_metadata(
        self, client: httpx.AsyncClient, raw_url: str | None
    ) -> MetadataRead | SingleMetadataRead:
        url = parse_url(raw_url)
        html = await self.fetch_html(client, url)
        metadata = self.parse_metadata(html, url)
        logger.debug(f"Extracted metadata for {url}")
        return metadata
