"""Exceptions raised by the Open Trivia DB access layer.

Everything derives from :class:`TriviaApiError` so the quiz controller can
catch one type and surface a single message to the player.
"""

from __future__ import annotations

from typing import Optional

__all__ = [
    "TriviaApiError",
    "TransportError",
    "TokenError",
    "RateLimitedError",
    "TooManyRequestsError",
    "RetriesExhaustedError",
    "ApiResponseError",
    "InsufficientQuestionsError",
    "InvalidParameterError",
    "TokenNotFoundError",
    "TokenExhaustedError",
    "EmptyResultError",
    "error_for_code",
]


class TriviaApiError(RuntimeError):
    """Base class for question source failures."""


class TransportError(TriviaApiError):
    """Network failure, non-2xx HTTP status or an undecodable body."""


class TokenError(TriviaApiError):
    """A session token could not be obtained, reset or used."""


class RateLimitedError(TriviaApiError):
    """The upstream API asked us to slow down (HTTP 429 or code 5)."""


class TooManyRequestsError(RateLimitedError):
    """A call arrived inside the client's cooldown window."""

    def __init__(self, retry_after: float) -> None:
        super().__init__(
            f"Too many requests; retry in {retry_after:.1f}s."
        )
        self.retry_after = retry_after


class RetriesExhaustedError(RateLimitedError):
    """Rate limiting persisted past the retry ceiling."""

    def __init__(self, attempts: int) -> None:
        super().__init__(
            f"Still rate limited after {attempts} attempt(s); giving up."
        )
        self.attempts = attempts


class ApiResponseError(TriviaApiError):
    """The API answered with a non-zero ``response_code``."""

    def __init__(self, code: Optional[int], message: str = "") -> None:
        super().__init__(message or f"API error: response code {code}")
        self.code = code


class InsufficientQuestionsError(ApiResponseError):
    """Code 1: not enough questions for the query."""


class InvalidParameterError(ApiResponseError):
    """Code 2: the query contained an invalid parameter."""


class TokenNotFoundError(ApiResponseError, TokenError):
    """Code 3: the session token does not exist."""


class TokenExhaustedError(ApiResponseError, TokenError):
    """Code 4: the token has served every question, even after a reset."""


class EmptyResultError(TriviaApiError):
    """Code 0 with an empty result list."""


_BY_CODE = {
    1: (
        InsufficientQuestionsError,
        "The API does not have enough questions for your query.",
    ),
    2: (InvalidParameterError, "The API rejected a query parameter."),
    3: (TokenNotFoundError, "The session token was not found."),
    4: (
        TokenExhaustedError,
        "The session token has returned all possible questions.",
    ),
}


def error_for_code(code: Optional[int]) -> ApiResponseError:
    """Return the exception matching a failing response code."""

    if code in _BY_CODE:
        cls, message = _BY_CODE[code]
        return cls(code, message)
    return ApiResponseError(code)
