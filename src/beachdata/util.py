"""Common utilities and exception classes."""


class BeachdataError(Exception):
    """Base exception for beachdata."""

    status = 500


class FetchError(BeachdataError):
    """Upstream unreachable or non-success status after retries."""


class ParseError(BeachdataError):
    """Upstream payload has an unexpected shape (e.g. feed is not a list)."""


class RequestError(BeachdataError):
    """Client-side error for a request-scoped operation."""

    status = 400


class MissingParameterError(RequestError):
    status = 400


class TournamentNotFoundError(RequestError):
    status = 404


class TcodeUnavailableError(RequestError):
    status = 422
