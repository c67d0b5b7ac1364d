"""Errors raised by the question service and their mapping to HTTP replies."""

from __future__ import annotations

from http import HTTPStatus


class ApiError(Exception):
    """Base class for errors that the service turns into an HTTP reply."""

    status: HTTPStatus = HTTPStatus.REQUESTED_RANGE_NOT_SATISFIABLE


class ParseError(ApiError):
    """A query parameter could not be parsed as a non-negative integer."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Cannot parse parameter: {reason}")
        self.reason = reason


class MissingParameters(ApiError):
    """A required parameter was not supplied."""

    def __init__(self) -> None:
        super().__init__("Missing parameter")


class QuestionNotFound(ApiError):
    """No question is stored under the requested id."""

    def __init__(self) -> None:
        super().__init__("Question not found")


class InvalidId(ApiError):
    """A question carries an id that is not a number."""

    status = HTTPStatus.UNPROCESSABLE_ENTITY

    def __init__(self) -> None:
        super().__init__("No valid ID presented")


class CorsForbidden(ApiError):
    """A cross-origin request was refused."""

    status = HTTPStatus.FORBIDDEN

    def __init__(self, reason: str) -> None:
        super().__init__(f"CORS request forbidden: {reason}")
        self.reason = reason


class BodyDeserializeError(ApiError):
    """A request body could not be turned into the expected value."""

    status = HTTPStatus.UNPROCESSABLE_ENTITY

    def __init__(self, cause: str) -> None:
        super().__init__(f"Request body deserialize error: {cause}")
        self.cause = cause


def recover(error: BaseException) -> tuple[str, HTTPStatus]:
    """Return the reply body and status for an error raised while handling a request."""
    if isinstance(error, ApiError):
        return str(error), error.status
    return repr(error), HTTPStatus.NOT_FOUND