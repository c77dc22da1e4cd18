"""Global pytest fixtures for testing."""

import asyncio
import contextlib
import json
from collections.abc import AsyncGenerator, AsyncIterator, Callable
from typing import Any

import dotenv
import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from feedscout_api.dependencies import get_discovery_registry
from feedscout_api.main import app
from feedscout_core.config import DiscoverySettings
from feedscout_core.discovery import DiscoveryRegistry, FeedValidator, create_default_registry

with contextlib.suppress(OSError):
    dotenv.load_dotenv()


Route = httpx.Response | Callable[[httpx.Request], httpx.Response]


class SlowStream(httpx.AsyncByteStream):
    """Response body sent in chunks with a pause before each one."""

    def __init__(self, body: bytes, chunks: int, delay: float) -> None:
        size = -(-len(body) // chunks)
        self._chunks = [body[i : i + size] for i in range(0, len(body), size)]
        self._delay = delay

    async def __aiter__(self) -> AsyncIterator[bytes]:
        for chunk in self._chunks:
            await asyncio.sleep(self._delay)
            yield chunk


class FeedServer:
    """
    In-memory web server for discovery tests.

    Routes are matched on the full URL first, then on the URL without its
    query string. Unrouted URLs answer 404. Every request is recorded.
    """

    def __init__(self) -> None:
        self.routes: dict[str, Route] = {}
        self.requests: list[httpx.Request] = []

    def add(
        self,
        url: str,
        body: str | bytes = "",
        status_code: int = 200,
        content_type: str = "application/rss+xml",
    ) -> None:
        headers = {"content-type": content_type} if content_type else {}
        self.routes[url] = httpx.Response(status_code, headers=headers, content=body)

    def add_json(self, url: str, payload: Any, status_code: int = 200) -> None:
        self.add(url, json.dumps(payload), status_code, content_type="application/json")

    def add_redirect(self, url: str, location: str, status_code: int = 301) -> None:
        self.routes[url] = httpx.Response(status_code, headers={"location": location})

    def add_handler(self, url: str, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.routes[url] = handler

    def add_slow(
        self,
        url: str,
        body: str,
        chunks: int = 6,
        delay: float = 0.1,
        content_type: str = "application/rss+xml",
    ) -> None:
        """Serve ``body`` in ``chunks`` pieces, each delayed by ``delay`` seconds."""
        self.routes[url] = lambda request: httpx.Response(
            200,
            headers={"content-type": content_type},
            stream=SlowStream(body.encode(), chunks, delay),
        )

    def requested(self, url: str) -> int:
        """Number of requests made for ``url`` (query string included)."""
        return sum(1 for request in self.requests if str(request.url) == url)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url = str(request.url)
        route = self.routes.get(url) or self.routes.get(url.split("?")[0])
        if route is None:
            return httpx.Response(404, text="Not Found")
        if callable(route) and not isinstance(route, httpx.Response):
            return route(request)
        return httpx.Response(route.status_code, headers=route.headers, content=route.content)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)


class FeedDocuments:
    """Builders for minimal feed documents."""

    @staticmethod
    def rss(title: str = "Example Blog", description: str = "Posts", items: int = 1) -> str:
        entries = "".join(
            f"<item><title>Post {i}</title><link>https://example.com/{i}</link></item>"
            for i in range(items)
        )
        return (
            '<?xml version="1.0" encoding="UTF-8"?>'
            '<rss version="2.0"><channel>'
            f"<title>{title}</title><link>https://example.com/</link>"
            f"<description>{description}</description>{entries}"
            "</channel></rss>"
        )

    @staticmethod
    def atom(title: str = "Example Atom", feed_id: str = "urn:uuid:example-feed") -> str:
        return (
            '<?xml version="1.0" encoding="UTF-8"?>'
            '<feed xmlns="http://www.w3.org/2005/Atom">'
            f"<title>{title}</title><id>{feed_id}</id>"
            "<subtitle>Atom subtitle</subtitle>"
            '<link href="https://example.com/"/>'
            "<updated>2024-01-01T00:00:00Z</updated>"
            "<entry><title>Entry</title><id>urn:uuid:entry-1</id>"
            "<updated>2024-01-01T00:00:00Z</updated></entry>"
            "</feed>"
        )

    @staticmethod
    def rdf(title: str = "Example RDF") -> str:
        return (
            '<?xml version="1.0" encoding="UTF-8"?>'
            '<rdf:RDF xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#" '
            'xmlns="http://purl.org/rss/1.0/">'
            '<channel rdf:about="https://example.com/">'
            f"<title>{title}</title><link>https://example.com/</link>"
            "<description>RDF channel</description></channel>"
            '<item rdf:about="https://example.com/1"><title>One</title>'
            "<link>https://example.com/1</link></item>"
            "</rdf:RDF>"
        )

    @staticmethod
    def json_feed(title: str = "Example JSON") -> str:
        return json.dumps(
            {
                "version": "https://jsonfeed.org/version/1.1",
                "title": title,
                "home_page_url": "https://example.com/",
                "items": [{"id": "1", "content_text": "Hello"}],
            }
        )

    @staticmethod
    def html(*feed_links: tuple[str, str], body: str = "") -> str:
        links = "".join(
            f'<link rel="alternate" type="{link_type}" href="{href}">'
            for href, link_type in feed_links
        )
        return f"<html><head><title>Page</title>{links}</head><body>{body}</body></html>"


@pytest.fixture
def feed_server() -> FeedServer:
    """Simulated web server with no routes."""
    return FeedServer()


@pytest.fixture
def docs() -> type[FeedDocuments]:
    """Feed document builders."""
    return FeedDocuments


@pytest.fixture
def settings() -> DiscoverySettings:
    """Discovery settings isolated from the environment file."""
    return DiscoverySettings(_env_file=None)


@pytest.fixture
def registry(feed_server: FeedServer, settings: DiscoverySettings) -> DiscoveryRegistry:
    """Default discovery registry wired to the simulated server."""
    return create_default_registry(settings=settings, transport=feed_server.transport)


@pytest_asyncio.fixture
async def http_client(feed_server: FeedServer) -> AsyncGenerator[httpx.AsyncClient, None]:
    """HTTP client wired to the simulated server."""
    async with httpx.AsyncClient(transport=feed_server.transport, follow_redirects=True) as client:
        yield client


@pytest.fixture
def validator(http_client: httpx.AsyncClient, settings: DiscoverySettings) -> FeedValidator:
    """Feed validator with fresh deduplication state."""
    return FeedValidator(http_client, settings, set(), set())


@pytest_asyncio.fixture
async def client(registry: DiscoveryRegistry) -> AsyncGenerator[AsyncClient, None]:
    """Create test HTTP client for the API with the discovery registry overridden."""
    app.dependency_overrides[get_discovery_registry] = lambda: registry

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
