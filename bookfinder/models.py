from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        serialize_by_alias=True,
    )


class Book(CamelModel):
    model_config = ConfigDict(frozen=True)

    title: str
    # One entry per author, each followed by a newline.
    authors: str | None = None


class FetchStatus(str, Enum):
    OK = "ok"
    NO_DATA = "no_data"
    FAILED = "failed"


class FetchResult(CamelModel):
    status: FetchStatus
    books: list[Book] | None = None
    error_message: str | None = None
    status_code: int | None = None

    @property
    def is_success(self) -> bool:
        return self.status is not FetchStatus.FAILED


class SearchStatus(CamelModel):
    is_success: bool
    error_message: str | None = None


class SearchResponse(CamelModel):
    status: SearchStatus
    query: str
    books: list[Book] = []


class HealthResponse(CamelModel):
    status: str
    version: str
