"""Fetch one page of Google Books search results and map it to :class:`Book` records.

Every failure is recovered here: nothing raises past :func:`fetch_books` or
:func:`search_books`. ``fetch_books`` keeps the silent contract (a list,
possibly partial, or ``None`` when no body was obtained) while
``search_books`` returns a :class:`FetchResult` that says what went wrong.
"""

import logging
import re
from typing import Annotated, Any

import httpx
from pydantic import BaseModel, BeforeValidator, Field, ValidationError

from bookfinder.config import settings
from bookfinder.errors import (
    BookParseError,
    BookSearchError,
    InvalidRequestUrl,
    TransportFailure,
    UnexpectedStatus,
)
from bookfinder.models import Book, FetchResult, FetchStatus

logger = logging.getLogger(__name__)

_ALLOWED_SCHEMES = {"http", "https"}

# Only CR, LF and CRLF end a line; other Unicode separators stay in the text.
_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def _scalar_to_str(value: Any) -> Any:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return value


_Text = Annotated[str, BeforeValidator(_scalar_to_str)]


class _VolumeInfo(BaseModel):
    title: _Text
    # Absent means no authors; null or a non-array value is a parse failure.
    authors: list[_Text] = []


class _Volume(BaseModel):
    volume_info: _VolumeInfo = Field(alias="volumeInfo")


class _VolumesPage(BaseModel):
    # Items are validated one at a time so earlier records survive a bad one.
    items: list[Any]


def fetch_books(request_url: str, client: httpx.Client | None = None) -> list[Book] | None:
    """Return the books found at ``request_url``.

    ``None`` means no response body was obtained (bad URL, network error,
    non-200 status or an empty body). A body that fails to parse yields the
    records read before the failure, which may be an empty list.
    """
    return search_books(request_url, client).books


def search_books(request_url: str, client: httpx.Client | None = None) -> FetchResult:
    try:
        url = _parse_url(request_url)
        body = _download(url, client)
    except UnexpectedStatus as e:
        logger.error("%s", e)
        return FetchResult(
            status=FetchStatus.FAILED,
            error_message=str(e),
            status_code=e.status_code,
        )
    except BookSearchError as e:
        logger.error("%s", e)
        return FetchResult(status=FetchStatus.FAILED, error_message=str(e))

    if _is_empty(body):
        return FetchResult(status=FetchStatus.NO_DATA, status_code=httpx.codes.OK)

    books: list[Book] = []
    try:
        _parse_into(body, books)
    except BookParseError as e:
        logger.error("Problem parsing the books JSON results: %s", e)
        return FetchResult(
            status=FetchStatus.FAILED,
            books=books,
            error_message=str(e),
            status_code=httpx.codes.OK,
        )
    return FetchResult(status=FetchStatus.OK, books=books, status_code=httpx.codes.OK)


def create_url(request_url: str) -> httpx.URL | None:
    try:
        return _parse_url(request_url)
    except InvalidRequestUrl as e:
        logger.error("%s", e)
        return None


def make_http_request(url: httpx.URL | None, client: httpx.Client | None = None) -> str:
    """GET ``url`` and return the body, or ``""`` on any failure."""
    if url is None:
        return ""
    try:
        return _download(url, client)
    except BookSearchError as e:
        logger.error("%s", e)
        return ""


def extract_books(body: str | None) -> list[Book] | None:
    if _is_empty(body):
        return None

    books: list[Book] = []
    try:
        _parse_into(body, books)
    except BookParseError as e:
        logger.error("Problem parsing the books JSON results: %s", e)
    return books


def read_body(response: httpx.Response) -> str:
    response.encoding = "utf-8"
    response.read()
    if settings.preserve_line_breaks:
        return response.text
    # Lines are joined with no separator.
    return "".join(_LINE_BREAK.split(response.text))


def request_timeout() -> httpx.Timeout:
    return httpx.Timeout(
        settings.read_timeout_ms / 1000,
        connect=settings.connect_timeout_ms / 1000,
    )


def _parse_url(request_url: str) -> httpx.URL:
    try:
        url = httpx.URL(request_url)
    except (httpx.InvalidURL, TypeError) as e:
        raise InvalidRequestUrl(f"Problem building the url: {e}") from e
    if url.scheme not in _ALLOWED_SCHEMES or not url.host:
        raise InvalidRequestUrl(f"Problem building the url: {request_url!r}")
    return url


def _download(url: httpx.URL, client: httpx.Client | None) -> str:
    try:
        if client is None:
            with httpx.Client(timeout=request_timeout(), follow_redirects=True) as own_client:
                return _get(own_client, url)
        return _get(client, url)
    except httpx.HTTPError as e:
        raise TransportFailure(
            f"Problem encountered while retrieving book results: {e!r}"
        ) from e


def _get(client: httpx.Client, url: httpx.URL) -> str:
    with client.stream("GET", url, timeout=request_timeout(), follow_redirects=True) as response:
        if response.status_code != httpx.codes.OK:
            raise UnexpectedStatus(response.status_code)
        return read_body(response)


def _is_empty(body: str | None) -> bool:
    return not body or not body.strip()


def _parse_into(body: str, books: list[Book]) -> None:
    try:
        page = _VolumesPage.model_validate_json(body)
    except ValidationError as e:
        raise BookParseError(f"invalid response document: {e}") from e

    for index, item in enumerate(page.items):
        try:
            volume = _Volume.model_validate(item)
        except ValidationError as e:
            raise BookParseError(f"invalid item at index {index}: {e}") from e
        books.append(_to_book(volume.volume_info))


def _to_book(info: _VolumeInfo) -> Book:
    authors = "".join(f"{author}\n" for author in info.authors)
    if authors:
        return Book(title=info.title, authors=authors)
    return Book(title=info.title)
