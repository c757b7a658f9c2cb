import httpx
import pytest
import pytest_asyncio

from metadata_api.api.deps import get_http_client, get_metadata_service
from metadata_api.main import app
from metadata_api.services.metadata import FetchConfig, MetadataService


class FakeUpstream:
    """Stands in for the internet: serves canned pages keyed by absolute URL."""

    def __init__(self):
        self.pages: dict[str, tuple[int, str]] = {}
        self.errors: dict[str, Exception] = {}
        self.requests: list[httpx.Request] = []

    def add_page(self, url: str, html: str, status_code: int = 200) -> None:
        self.pages[url] = (status_code, html)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url = str(request.url)
        if url in self.errors:
            raise self.errors[url]
        if url not in self.pages:
            raise httpx.ConnectError("Name or service not known", request=request)
        status_code, html = self.pages[url]
        return httpx.Response(status_code, html=html)


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def shape() -> str:
    return "multi"


@pytest_asyncio.fixture
async def client(upstream: FakeUpstream, shape: str):
    service = MetadataService(FetchConfig(), shape=shape)

    async def override_http_client():
        async with service.build_client(httpx.MockTransport(upstream.handler)) as c:
            yield c

    app.dependency_overrides[get_metadata_service] = lambda: service
    app.dependency_overrides[get_http_client] = override_http_client
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
