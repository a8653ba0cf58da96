import asyncio

import httpx

from bookfinder.config import settings
from bookfinder.interfaces.book_search import BookSearchClient
from bookfinder.models import FetchResult, FetchStatus
from bookfinder.services.fetcher import search_books


class GoogleBooksClient(BookSearchClient):
    MAX_RESULTS_LIMIT = 40

    def __init__(
        self, base_url: str | None = None, client: httpx.Client | None = None
    ) -> None:
        self._base_url = base_url or settings.books_api_url
        self._client = client

    def build_request_url(self, query: str, limit: int) -> str:
        limit = max(1, min(limit, self.MAX_RESULTS_LIMIT))
        url = httpx.URL(self._base_url).copy_merge_params(
            {"q": query, "maxResults": limit}
        )
        return str(url)

    async def search(self, query: str, limit: int = 10) -> FetchResult:
        query = self.normalize_query(query)
        if not query:
            return FetchResult(status=FetchStatus.OK, books=[])

        request_url = self.build_request_url(query, limit)
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            None, lambda: search_books(request_url, self._client)
        )
