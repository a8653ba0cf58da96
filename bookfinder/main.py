import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Query

from bookfinder.config import settings
from bookfinder.interfaces.book_search import BookSearchClient
from bookfinder.models import HealthResponse, SearchResponse, SearchStatus
from bookfinder.services.google_books import GoogleBooksClient

VERSION = "0.1.0"

book_search: BookSearchClient | None = None


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    global book_search
    configure_logging()
    book_search = GoogleBooksClient()
    yield
    book_search = None


app = FastAPI(title="Book Search", version=VERSION, lifespan=lifespan)


@app.get("/health", response_model=HealthResponse)
async def health():
    return HealthResponse(status="healthy", version=VERSION)


@app.get("/search", response_model=SearchResponse)
async def search(
    q: str = Query(..., min_length=1),
    limit: int = Query(settings.default_max_results, ge=1, le=GoogleBooksClient.MAX_RESULTS_LIMIT),
):
    assert book_search is not None
    result = await book_search.search(q, limit)

    if not result.is_success:
        raise HTTPException(
            status_code=502,
            detail=f"Book search failed: {result.error_message}",
        )

    return SearchResponse(
        status=SearchStatus(is_success=True),
        query=q,
        books=result.books or [],
    )
