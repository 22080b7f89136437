"""HTTP client for the Open Trivia Database.

One :class:`TriviaClient` owns one session token and one cooldown clock, so
independent instances never share state. Calls are synchronous; retries run
one after another with an exponential backoff between them.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Mapping, Optional

import requests

from .errors import (
    ApiResponseError,
    EmptyResultError,
    RateLimitedError,
    RetriesExhaustedError,
    TokenError,
    TokenNotFoundError,
    TooManyRequestsError,
    TransportError,
    error_for_code,
)
from .models import Category, Difficulty, Question, QuestionType

__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_TOKEN_URL",
    "DEFAULT_CATEGORY_URL",
    "TriviaClient",
]

DEFAULT_BASE_URL = "https://opentdb.com/api.php"
DEFAULT_TOKEN_URL = "https://opentdb.com/api_token.php"
DEFAULT_CATEGORY_URL = "https://opentdb.com/api_category.php"

CODE_SUCCESS = 0
CODE_TOKEN_NOT_FOUND = 3
CODE_TOKEN_EMPTY = 4
CODE_RATE_LIMIT = 5

logger = logging.getLogger(__name__)

Clock = Callable[[], float]
Sleeper = Callable[[float], None]


class TriviaClient:
    """Live question source backed by ``requests``.

    Args:
        session: HTTP session to issue requests with; a new
            ``requests.Session`` when omitted.
        max_retries: Extra attempts allowed after a rate-limited response.
        base_delay: Backoff before the first retry; doubles afterwards.
        cooldown: Minimum seconds between two public calls. Calls that
            arrive earlier raise :class:`TooManyRequestsError`.
        clock/sleep: Injected for tests; default to ``time.monotonic`` and
            ``time.sleep``.
    """

    def __init__(
        self,
        *,
        base_url: str = DEFAULT_BASE_URL,
        token_url: str = DEFAULT_TOKEN_URL,
        category_url: str = DEFAULT_CATEGORY_URL,
        timeout: float = 10.0,
        max_retries: int = 3,
        base_delay: float = 1.0,
        cooldown: float = 5.0,
        session: Optional[requests.Session] = None,
        clock: Clock = time.monotonic,
        sleep: Sleeper = time.sleep,
    ) -> None:
        if max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        self.base_url = base_url
        self.token_url = token_url
        self.category_url = category_url
        self.timeout = timeout
        self.max_retries = max_retries
        self.base_delay = base_delay
        self.cooldown = cooldown
        self._session = session or requests.Session()
        self._clock = clock
        self._sleep = sleep
        self._token: Optional[str] = None
        self._last_call: Optional[float] = None

    @property
    def token(self) -> Optional[str]:
        return self._token

    # -- public API -------------------------------------------------------

    def fetch_questions(
        self,
        amount: int = 10,
        difficulty: Optional[Difficulty] = None,
        type: Optional[QuestionType] = None,
        category: Optional[int] = None,
    ) -> list[Question]:
        """Fetch ``amount`` questions, handling tokens and rate limits.

        Raises a :class:`~trivia_quiz.api.errors.TriviaApiError` subclass on
        failure; never returns an empty list.
        """

        if amount <= 0:
            raise ValueError("amount must be positive")
        self._enter_cooldown()

        token_reset = False
        reset_pending = False
        attempt = 0
        while True:
            attempt += 1
            try:
                if reset_pending:
                    self.reset_token()
                    reset_pending = False
                if self._token is None:
                    self.request_token()
                payload = self._get_json(
                    self.base_url,
                    self._question_params(amount, difficulty, type, category),
                )
                return self._parse_questions(payload)
            except _TokenExhausted:
                # One reset and one retried request, taken from the same
                # attempt budget as rate-limit retries. The reset runs on
                # the next pass, under the same rate-limit handling.
                if token_reset or attempt > self.max_retries:
                    raise error_for_code(CODE_TOKEN_EMPTY) from None
                token_reset = True
                reset_pending = True
                logger.info("Session token exhausted; resetting it")
            except RateLimitedError as exc:
                if attempt > self.max_retries:
                    logger.warning(
                        "Giving up after %d rate-limited attempt(s)", attempt
                    )
                    raise RetriesExhaustedError(attempt) from exc
                delay = self.backoff_delay(attempt)
                logger.info(
                    "Rate limited; retrying in %.2fs",
                    delay,
                    extra={"attempt": attempt, "delay": delay},
                )
                self._sleep(delay)

    def fetch_categories(self) -> list[Category]:
        """Return the category list offered by the API."""

        payload = self._get_json(self.category_url, {})
        raw = payload.get("trivia_categories")
        if not isinstance(raw, list):
            raise ApiResponseError(
                None, "Category response has no trivia_categories list."
            )
        return [Category.from_payload(item) for item in raw]

    def request_token(self) -> str:
        """Ask the API for a new session token and cache it."""

        payload = self._get_json(self.token_url, {"command": "request"})
        token = payload.get("token")
        if payload.get("response_code") != CODE_SUCCESS or not token:
            raise TokenError(
                "Failed to retrieve session token: "
                f"{payload.get('response_message') or 'no token returned'}"
            )
        self._token = str(token)
        logger.info("Obtained a new session token")
        return self._token

    def reset_token(self) -> None:
        """Reset the cached token so it can serve every question again."""

        if self._token is None:
            return
        payload = self._get_json(
            self.token_url, {"command": "reset", "token": self._token}
        )
        if payload.get("response_code") != CODE_SUCCESS:
            raise TokenError(
                "Failed to reset session token: "
                f"{payload.get('response_message') or 'unknown error'}"
            )
        new_token = payload.get("token")
        if new_token:
            self._token = str(new_token)

    def backoff_delay(self, attempt: int) -> float:
        """Delay before retry number ``attempt`` (1-based)."""

        return self.base_delay * (2 ** (attempt - 1))

    # -- internals --------------------------------------------------------

    def _enter_cooldown(self) -> None:
        now = self._clock()
        if self._last_call is not None:
            elapsed = now - self._last_call
            if elapsed < self.cooldown:
                raise TooManyRequestsError(self.cooldown - elapsed)
        self._last_call = now

    def _question_params(
        self,
        amount: int,
        difficulty: Optional[Difficulty],
        qtype: Optional[QuestionType],
        category: Optional[int],
    ) -> dict[str, str]:
        params = {
            "amount": str(amount),
            "token": self._token or "",
            "encode": "url3986",
        }
        if difficulty:
            params["difficulty"] = Difficulty(difficulty).value
        if qtype:
            params["type"] = QuestionType(qtype).value
        if category:
            params["category"] = str(category)
        return params

    def _parse_questions(self, payload: Mapping[str, Any]) -> list[Question]:
        code = payload.get("response_code")
        if code == CODE_SUCCESS:
            results = payload.get("results")
            if not isinstance(results, list) or not results:
                raise EmptyResultError("The API returned no questions.")
            return [Question.from_payload(item) for item in results]
        if code == CODE_TOKEN_EMPTY:
            raise _TokenExhausted()
        if code == CODE_RATE_LIMIT:
            raise RateLimitedError("The API reported rate limiting (code 5).")
        if code == CODE_TOKEN_NOT_FOUND:
            # The next call will ask for a fresh token.
            self._token = None
        error = error_for_code(code if isinstance(code, int) else None)
        logger.warning("Trivia API error: %s", error)
        raise error

    def _get_json(
        self, url: str, params: Mapping[str, str]
    ) -> Mapping[str, Any]:
        try:
            response = self._session.get(
                url, params=dict(params), timeout=self.timeout
            )
        except requests.RequestException as exc:
            logger.warning("Request to %s failed: %s", url, exc)
            raise TransportError(f"Request to {url} failed: {exc}") from exc

        if response.status_code == 429:
            raise RateLimitedError("HTTP 429 Too Many Requests")
        try:
            response.raise_for_status()
        except requests.HTTPError as exc:
            raise TransportError(
                f"HTTP {response.status_code} from {url}"
            ) from exc
        try:
            data = response.json()
        except ValueError as exc:
            raise TransportError(f"Invalid JSON from {url}") from exc
        if not isinstance(data, Mapping):
            raise TransportError(f"Unexpected JSON payload from {url}")
        return data


class _TokenExhausted(Exception):
    """Internal signal for response code 4."""
