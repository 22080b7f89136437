"""``trivia play``: run a quiz in the console or as a Textual app."""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from rich.console import Console

from ..api.models import Difficulty, QuestionType
from ..api.sources import build_question_source
from ..core.config import ConfigError
from ..quiz.controller import QuizController
from ..quiz.session import run_quiz_session
from ._runtime import add_common_arguments, load_runtime


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="trivia play",
        description="Play a trivia quiz from the Open Trivia Database.",
    )
    p.add_argument(
        "--amount",
        type=int,
        help="Number of questions (1-50, default from config).",
    )
    p.add_argument(
        "--difficulty",
        choices=[d.value for d in Difficulty],
    )
    p.add_argument(
        "--type",
        dest="qtype",
        choices=[t.value for t in QuestionType],
    )
    p.add_argument("--category", type=int, help="Category id.")
    p.add_argument(
        "--tui",
        action="store_true",
        help="Use the Textual interface instead of the console prompt.",
    )
    add_common_arguments(p)
    return p


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    try:
        config, logger = load_runtime(args)
        config = config.with_quiz(
            amount=args.amount,
            difficulty=args.difficulty,
            type=args.qtype,
            category=args.category,
        )
    except ConfigError as exc:
        sys.stderr.write(f"Error: {exc}\n")
        return 2

    controller = QuizController(
        build_question_source(config),
        amount=config.quiz.amount,
        difficulty=config.quiz.difficulty,
        type=config.quiz.type,
        category=config.quiz.category,
    )
    logger.info(
        "Starting quiz",
        extra={
            "amount": config.quiz.amount,
            "fixtures": config.fixtures.enabled,
            "tui": args.tui,
        },
    )

    if args.tui:
        from ..quiz.view import TriviaApp

        TriviaApp(controller).run()
        return 0

    console = Console()
    result = run_quiz_session(
        controller,
        console,
        lambda: console.input("[bold cyan]> [/]"),
    )
    logger.info(
        "Quiz finished",
        extra={
            "score": result.score,
            "total": result.total,
            "exit_action": result.exit_action,
        },
    )
    return 1 if result.exit_action == "error" else 0


if __name__ == "__main__":  # pragma: no cover - module CLI guard
    raise SystemExit(main())
