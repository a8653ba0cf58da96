class BookSearchError(Exception):
    """Base class for failures inside the fetch pipeline."""


class InvalidRequestUrl(BookSearchError):
    pass


class TransportFailure(BookSearchError):
    pass


class UnexpectedStatus(BookSearchError):
    def __init__(self, status_code: int) -> None:
        super().__init__(f"Error while connecting. Error Code: {status_code}")
        self.status_code = status_code


class BookParseError(BookSearchError):
    pass
