"""Typed records for Open Trivia DB payloads."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping
from urllib.parse import unquote

from .errors import ApiResponseError


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class QuestionType(str, Enum):
    MULTIPLE = "multiple"
    BOOLEAN = "boolean"


@dataclass(frozen=True)
class Question:
    """A question as served by the API.

    Text fields are kept exactly as received; with ``encode=url3986`` they
    are percent-encoded and must go through ``decode_text`` before display.
    """

    category: str
    type: QuestionType
    difficulty: Difficulty
    question: str
    correct_answer: str
    incorrect_answers: tuple[str, ...]

    @classmethod
    def from_payload(cls, data: Mapping[str, Any]) -> "Question":
        if not isinstance(data, Mapping):
            raise ApiResponseError(None, "Question entry is not an object.")
        incorrect = data.get("incorrect_answers")
        if not isinstance(incorrect, list):
            raise ApiResponseError(
                None, "Question entry has no incorrect_answers list."
            )
        try:
            qtype = QuestionType(_decoded_enum_value(data.get("type")))
            difficulty = Difficulty(
                _decoded_enum_value(data.get("difficulty"))
            )
        except ValueError as exc:
            raise ApiResponseError(
                None, f"Unexpected question attribute: {exc}"
            ) from exc
        return cls(
            category=str(data.get("category", "")),
            type=qtype,
            difficulty=difficulty,
            question=str(data.get("question", "")),
            correct_answer=str(data.get("correct_answer", "")),
            incorrect_answers=tuple(str(item) for item in incorrect),
        )

    @property
    def all_answers(self) -> tuple[str, ...]:
        return (self.correct_answer, *self.incorrect_answers)


@dataclass(frozen=True)
class Category:
    id: int
    name: str

    @classmethod
    def from_payload(cls, data: Mapping[str, Any]) -> "Category":
        try:
            return cls(id=int(data["id"]), name=str(data["name"]))
        except (KeyError, TypeError, ValueError) as exc:
            raise ApiResponseError(
                None, f"Malformed category entry: {data!r}"
            ) from exc


def _decoded_enum_value(raw: Any) -> str:
    # Enum-like fields are plain ASCII words; unquoting is all they need.
    return unquote(str(raw or "")).strip().lower()
