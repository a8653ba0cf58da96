from abc import ABC, abstractmethod

from bookfinder.models import FetchResult


class BookSearchClient(ABC):
    @abstractmethod
    def build_request_url(self, query: str, limit: int) -> str:
        ...

    @abstractmethod
    async def search(self, query: str, limit: int = 10) -> FetchResult:
        ...

    @staticmethod
    def normalize_query(query: str) -> str:
        return " ".join(query.split())
