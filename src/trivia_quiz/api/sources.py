"""Question sources: the live API client or a built-in fixture set.

The choice is made once, when the source is built, so a running quiz never
switches between network and canned data.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional, Protocol, Sequence

from .client import TriviaClient
from .models import Category, Difficulty, Question, QuestionType

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..core.config import TriviaConfig

__all__ = [
    "QuestionSource",
    "FixtureQuestionSource",
    "FIXTURE_QUESTIONS",
    "FIXTURE_CATEGORIES",
    "build_question_source",
]

logger = logging.getLogger(__name__)


class QuestionSource(Protocol):
    def fetch_questions(
        self,
        amount: int = 10,
        difficulty: Optional[Difficulty] = None,
        type: Optional[QuestionType] = None,
        category: Optional[int] = None,
    ) -> list[Question]: ...

    def fetch_categories(self) -> list[Category]: ...


def _q(
    category: str,
    difficulty: str,
    question: str,
    correct: str,
    *incorrect: str,
) -> Question:
    qtype = QuestionType.BOOLEAN if len(incorrect) == 1 else (
        QuestionType.MULTIPLE
    )
    return Question(
        category=category,
        type=qtype,
        difficulty=Difficulty(difficulty),
        question=question,
        correct_answer=correct,
        incorrect_answers=tuple(incorrect),
    )


FIXTURE_QUESTIONS: tuple[Question, ...] = (
    _q(
        "Science: Computers",
        "easy",
        "What does CPU stand for?",
        "Central Processing Unit",
        "Central Process Unit",
        "Computer Personal Unit",
        "Central Processor Unit",
    ),
    _q(
        "Geography",
        "easy",
        "What is the capital of Australia?",
        "Canberra",
        "Sydney",
        "Melbourne",
        "Perth",
    ),
    _q(
        "Science &amp; Nature",
        "medium",
        "What is the chemical symbol for gold?",
        "Au",
        "Ag",
        "Gd",
        "Go",
    ),
    _q(
        "History",
        "medium",
        "The Battle of Hastings took place in 1066.",
        "True",
        "False",
    ),
    _q(
        "Entertainment: Books",
        "medium",
        "Who wrote &quot;Pride and Prejudice&quot;?",
        "Jane Austen",
        "Charlotte Bront&euml;",
        "Mary Shelley",
        "George Eliot",
    ),
    _q(
        "Mathematics",
        "hard",
        "What is the smallest prime number greater than 100?",
        "101",
        "103",
        "107",
        "109",
    ),
    _q(
        "Science: Computers",
        "easy",
        "Python was named after the comedy group Monty Python.",
        "True",
        "False",
    ),
    _q(
        "Geography",
        "medium",
        "Which river flows through Budapest?",
        "Danube",
        "Rhine",
        "Vistula",
        "Elbe",
    ),
    _q(
        "Art",
        "hard",
        "Who painted &#039;The Persistence of Memory&#039;?",
        "Salvador Dal&iacute;",
        "Ren&eacute; Magritte",
        "Joan Mir&oacute;",
        "Max Ernst",
    ),
    _q(
        "General Knowledge",
        "easy",
        "How many continents are there on Earth?",
        "7",
        "5",
        "6",
        "8",
    ),
)

FIXTURE_CATEGORIES: tuple[Category, ...] = (
    Category(9, "General Knowledge"),
    Category(10, "Entertainment: Books"),
    Category(17, "Science & Nature"),
    Category(18, "Science: Computers"),
    Category(19, "Science: Mathematics"),
    Category(22, "Geography"),
    Category(23, "History"),
    Category(25, "Art"),
)


class FixtureQuestionSource:
    """Serve a fixed question set without touching the network.

    Filters are ignored; the first ``amount`` questions are returned.
    """

    def __init__(self, questions: Sequence[Question] = FIXTURE_QUESTIONS):
        self._questions = tuple(questions)

    def fetch_questions(
        self,
        amount: int = 10,
        difficulty: Optional[Difficulty] = None,
        type: Optional[QuestionType] = None,
        category: Optional[int] = None,
    ) -> list[Question]:
        return list(self._questions[: max(amount, 0)])

    def fetch_categories(self) -> list[Category]:
        return list(FIXTURE_CATEGORIES)


def build_question_source(config: "TriviaConfig") -> QuestionSource:
    """Create the source selected by ``config.fixtures.enabled``."""

    if config.fixtures.enabled:
        logger.info("Using built-in fixture questions")
        return FixtureQuestionSource()
    return TriviaClient(
        base_url=config.api.base_url,
        token_url=config.api.token_url,
        category_url=config.api.category_url,
        timeout=config.api.timeout_seconds,
        max_retries=config.retry.max_retries,
        base_delay=config.retry.base_delay_seconds,
        cooldown=config.retry.cooldown_seconds,
    )
