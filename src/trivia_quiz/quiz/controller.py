"""In-memory quiz session state machine.

``LOADING -> READY -> COMPLETED``, with ``ERROR`` reachable from
``LOADING``. The controller has no I/O of its own beyond the question
source it is given, so the Rich loop and the Textual app drive it the same
way.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from ..api.errors import EmptyResultError, TriviaApiError
from ..api.models import Difficulty, Question, QuestionType
from ..api.sources import QuestionSource
from ..content import decode_text, shuffle_answers

__all__ = [
    "QuizStatus",
    "PreparedQuestion",
    "QuizController",
    "prepare_question",
]

logger = logging.getLogger(__name__)


class QuizStatus(str, Enum):
    LOADING = "loading"
    READY = "ready"
    COMPLETED = "completed"
    ERROR = "error"


@dataclass(frozen=True)
class PreparedQuestion:
    """A question decoded for display with its answers in play order."""

    category: str
    difficulty: Difficulty
    type: QuestionType
    text: str
    correct_answer: str
    answers: tuple[str, ...]

    def is_correct(self, answer: str) -> bool:
        return answer == self.correct_answer


def prepare_question(
    question: Question, rng: Optional[random.Random] = None
) -> PreparedQuestion:
    """Decode every text field and shuffle the answers once."""

    correct = decode_text(question.correct_answer)
    answers: list[str] = [correct]
    for raw in question.incorrect_answers:
        decoded = decode_text(raw)
        if decoded not in answers:
            answers.append(decoded)
    return PreparedQuestion(
        category=decode_text(question.category),
        difficulty=question.difficulty,
        type=question.type,
        text=decode_text(question.question),
        correct_answer=correct,
        answers=tuple(shuffle_answers(answers, rng)),
    )


class QuizController:
    """Holds one quiz session: questions, position, selection and score."""

    def __init__(
        self,
        source: QuestionSource,
        *,
        amount: int = 10,
        difficulty: Optional[Difficulty] = None,
        type: Optional[QuestionType] = None,
        category: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._source = source
        self.amount = amount
        self.difficulty = difficulty
        self.type = type
        self.category = category
        self._rng = rng
        self._fetching = False
        self._reset()

    def _reset(self) -> None:
        self.status = QuizStatus.LOADING
        self.questions: Sequence[PreparedQuestion] = ()
        self.index = 0
        self.selected: Optional[str] = None
        self.score = 0
        self.error: Optional[TriviaApiError] = None
        self.error_message: Optional[str] = None

    # -- derived state ----------------------------------------------------

    @property
    def total(self) -> int:
        return len(self.questions)

    @property
    def current(self) -> Optional[PreparedQuestion]:
        if not self.questions:
            return None
        return self.questions[self.index]

    @property
    def is_last_question(self) -> bool:
        return bool(self.questions) and self.index == len(self.questions) - 1

    @property
    def is_fetching(self) -> bool:
        return self._fetching

    @property
    def last_answer_correct(self) -> Optional[bool]:
        question = self.current
        if question is None or self.selected is None:
            return None
        return question.is_correct(self.selected)

    # -- transitions ------------------------------------------------------

    def load(self) -> bool:
        """Fetch and prepare the question set.

        Returns ``False`` without fetching when a fetch is already running
        or the session has moved past ``LOADING``.
        """

        if self._fetching or self.status is not QuizStatus.LOADING:
            return False
        self._fetching = True
        try:
            raw = self._source.fetch_questions(
                self.amount,
                difficulty=self.difficulty,
                type=self.type,
                category=self.category,
            )
            if not raw:
                raise EmptyResultError("No questions available.")
        except TriviaApiError as exc:
            self.status = QuizStatus.ERROR
            self.error = exc
            self.error_message = f"Failed to load questions: {exc}"
            logger.warning(
                "Quiz load failed", extra={"error": type(exc).__name__}
            )
            return True
        finally:
            self._fetching = False

        self.questions = tuple(prepare_question(q, self._rng) for q in raw)
        self.status = QuizStatus.READY
        logger.info("Quiz ready with %d question(s)", len(self.questions))
        return True

    def select(self, answer: str) -> bool:
        """Record the answer for the current question (first pick only)."""

        question = self.current
        if (
            self.status is not QuizStatus.READY
            or question is None
            or self.selected is not None
            or answer not in question.answers
        ):
            return False
        self.selected = answer
        if question.is_correct(answer):
            self.score += 1
        if self.is_last_question:
            self.status = QuizStatus.COMPLETED
            logger.info(
                "Quiz completed",
                extra={"score": self.score, "total": self.total},
            )
        return True

    def advance(self) -> bool:
        """Move to the next question once the current one is answered."""

        if (
            self.status is not QuizStatus.READY
            or self.selected is None
            or self.is_last_question
        ):
            return False
        self.index += 1
        self.selected = None
        return True

    def retry(self) -> bool:
        """Discard the session and go back to ``LOADING``.

        Allowed after an error, or after completion to play again.
        """

        if self._fetching or self.status not in (
            QuizStatus.ERROR,
            QuizStatus.COMPLETED,
        ):
            return False
        logger.info("Restarting quiz session from %s", self.status.value)
        self._reset()
        return True
