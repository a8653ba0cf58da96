import json
from collections.abc import Callable

import httpx
import pytest

from bookfinder.interfaces.book_search import BookSearchClient
from bookfinder.models import Book, FetchResult, FetchStatus

SEARCH_URL = "https://www.googleapis.com/books/v1/volumes?q=android&maxResults=10"


class MockBookSearchClient(BookSearchClient):
    def __init__(self, result: FetchResult | None = None, error: Exception | None = None):
        self._result = result or FetchResult(status=FetchStatus.OK, books=[])
        self._error = error
        self.calls: list[tuple[str, int]] = []

    def build_request_url(self, query: str, limit: int) -> str:
        return f"http://test/volumes?q={query}&maxResults={limit}"

    async def search(self, query: str, limit: int = 10) -> FetchResult:
        self.calls.append((query, limit))
        if self._error:
            raise self._error
        return self._result


def volume(title: str, authors: list[str] | None = None) -> dict:
    info: dict = {"title": title}
    if authors is not None:
        info["authors"] = authors
    return {"kind": "books#volume", "volumeInfo": info}


@pytest.fixture
def sample_document() -> dict:
    return {
        "kind": "books#volumes",
        "totalItems": 3,
        "items": [
            volume("Android Programming", ["Bill Phillips", "Brian Hardy"]),
            volume("Head First Android Development", ["Dawn Griffiths"]),
            volume("Android Internals"),
        ],
    }


@pytest.fixture
def sample_body(sample_document) -> str:
    return json.dumps(sample_document)


@pytest.fixture
def sample_books() -> list[Book]:
    return [
        Book(title="Android Programming", authors="Bill Phillips\nBrian Hardy\n"),
        Book(title="Head First Android Development", authors="Dawn Griffiths\n"),
        Book(title="Android Internals"),
    ]


@pytest.fixture
def make_client():
    """Build an ``httpx.Client`` whose requests are answered by ``handler``."""
    clients: list[httpx.Client] = []

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.Client:
        client = httpx.Client(transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.close()
