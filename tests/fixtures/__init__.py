"""Shared testing helpers for the trivia_quiz test suite."""

from .http import (  # noqa: F401
    CATEGORY_URL,
    QUESTION_URL,
    TOKEN_URL,
    FakeClock,
    FakeSession,
    make_response,
    question_payload,
    token_payload,
)

__all__ = [
    "CATEGORY_URL",
    "QUESTION_URL",
    "TOKEN_URL",
    "FakeClock",
    "FakeSession",
    "make_response",
    "question_payload",
    "token_payload",
]
