"""Access layer for the Open Trivia Database."""

from __future__ import annotations

from .client import TriviaClient
from .errors import (
    ApiResponseError,
    EmptyResultError,
    InsufficientQuestionsError,
    InvalidParameterError,
    RateLimitedError,
    RetriesExhaustedError,
    TokenError,
    TokenExhaustedError,
    TokenNotFoundError,
    TooManyRequestsError,
    TransportError,
    TriviaApiError,
)
from .models import Category, Difficulty, Question, QuestionType
from .sources import (
    FixtureQuestionSource,
    QuestionSource,
    build_question_source,
)

__all__ = [
    "TriviaClient",
    "FixtureQuestionSource",
    "QuestionSource",
    "build_question_source",
    "Category",
    "Difficulty",
    "Question",
    "QuestionType",
    "TriviaApiError",
    "TransportError",
    "TokenError",
    "TokenNotFoundError",
    "TokenExhaustedError",
    "RateLimitedError",
    "TooManyRequestsError",
    "RetriesExhaustedError",
    "ApiResponseError",
    "InsufficientQuestionsError",
    "InvalidParameterError",
    "EmptyResultError",
]
