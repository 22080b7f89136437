from .controller import (
    PreparedQuestion,
    QuizController,
    QuizStatus,
    prepare_question,
)
from .session import (
    QuizSessionResult,
    SessionCommand,
    parse_session_command,
    run_quiz_session,
)

__all__ = [
    "PreparedQuestion",
    "QuizController",
    "QuizStatus",
    "prepare_question",
    "QuizSessionResult",
    "SessionCommand",
    "parse_session_command",
    "run_quiz_session",
]
