# patent_search/core/exceptions.py


class PatentSearchError(Exception):
    """Base class for errors raised by the search and similarity services."""

    status_code: int = 500
    retryable: bool = False

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidParameter(PatentSearchError):
    """Malformed or missing user input. Correctable by the caller."""

    status_code = 400


class NotFound(PatentSearchError):
    status_code = 404


class StoreUnavailable(PatentSearchError):
    """
    The persistence layer failed. The detail stays in the server logs;
    clients only ever see a generic message and may retry.
    """

    status_code = 500
    retryable = True

    def __init__(self, message: str = "Internal Server Error"):
        super().__init__(message)
