"""Config + logging bootstrap shared by the subcommands."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from ..core.config import TriviaConfig, load_config
from ..core.logging import configure_logger
from ..core.workspace import ensure_workspace

LOGGER_NAME = "trivia_quiz"


def add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to a trivia.toml (defaults to TRIVIA_QUIZ_CONFIG or the "
        "workspace config).",
    )
    parser.add_argument(
        "--fixtures",
        action="store_true",
        default=None,
        help="Serve the built-in question set instead of calling the API.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Echo log records to stderr.",
    )


def load_runtime(
    args: argparse.Namespace,
) -> tuple[TriviaConfig, logging.Logger]:
    """Load ``.env``, the TOML config and attach log handlers.

    Raises :class:`~trivia_quiz.core.config.ConfigError` for bad configs.
    """

    load_dotenv()
    explicit: Optional[Path] = getattr(args, "config", None)
    config = load_config(explicit_path=explicit)
    if getattr(args, "fixtures", None):
        config = config.with_fixtures(True)
    layout = ensure_workspace()
    logger, _ = configure_logger(
        LOGGER_NAME,
        log_dir=layout.log_dir,
        level=config.logging.level,
        verbose=bool(getattr(args, "verbose", False))
        or config.logging.verbose,
    )
    return config, logger
