"""``trivia categories``: list the category ids accepted by ``--category``."""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from rich import box
from rich.console import Console
from rich.table import Table

from ..api.errors import TriviaApiError
from ..api.sources import build_question_source
from ..core.config import ConfigError
from ._runtime import add_common_arguments, load_runtime


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="trivia categories",
        description="List Open Trivia Database categories.",
    )
    p.add_argument("--filter", help="Only show names containing this text.")
    add_common_arguments(p)
    return p


def main(
    argv: Optional[Sequence[str]] = None, console: Optional[Console] = None
) -> int:
    args = build_arg_parser().parse_args(
        list(argv) if argv is not None else None
    )
    try:
        config, logger = load_runtime(args)
    except ConfigError as exc:
        sys.stderr.write(f"Error: {exc}\n")
        return 2

    try:
        categories = build_question_source(config).fetch_categories()
    except TriviaApiError as exc:
        logger.error("Category listing failed: %s", exc)
        sys.stderr.write(f"Error: {exc}\n")
        return 1

    needle = (args.filter or "").strip().lower()
    shown = [c for c in categories if needle in c.name.lower()]
    if not shown:
        sys.stdout.write("No categories match filter.\n")
        return 1

    table = Table(box=box.SIMPLE)
    table.add_column("ID", justify="right", style="cyan")
    table.add_column("Name")
    for category in sorted(shown, key=lambda c: c.id):
        table.add_row(str(category.id), category.name)
    (console or Console()).print(table)
    return 0


if __name__ == "__main__":  # pragma: no cover - module CLI guard
    raise SystemExit(main())
