"""Terminal trivia quiz backed by the Open Trivia Database."""

from .api import (
    FixtureQuestionSource,
    TriviaApiError,
    TriviaClient,
    build_question_source,
)
from .content import decode_text, shuffle_answers
from .quiz import QuizController, QuizStatus, run_quiz_session

__all__ = [
    "FixtureQuestionSource",
    "TriviaApiError",
    "TriviaClient",
    "build_question_source",
    "decode_text",
    "shuffle_answers",
    "QuizController",
    "QuizStatus",
    "run_quiz_session",
]
