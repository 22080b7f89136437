"""``trivia init``: create the workspace and a starter config file."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Mapping, Sequence

from ..core.config import ConfigError, write_template
from ..core.workspace import ensure_workspace


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="trivia init",
        description=(
            "Create the trivia workspace (config and logs directories) and "
            "write a trivia.toml template."
        ),
    )
    parser.add_argument(
        "--path",
        type=Path,
        help=(
            "Override the workspace root (defaults to TRIVIA_QUIZ_HOME "
            "or ~/.trivia-quiz)."
        ),
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite an existing trivia.toml.",
    )
    return parser


def _format_created(created: Mapping[str, bool], key: str) -> str:
    return "created" if created.get(key, False) else "exists"


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(list(argv) if argv is not None else None)

    layout = ensure_workspace(path=args.path)
    lines = [
        f"Workspace ready at {layout.home} "
        f"({_format_created(layout.created, 'home')})"
    ]
    for name, directory in layout.directories.items():
        status = _format_created(layout.created, name)
        lines.append(f"  {name.ljust(6)}  {directory} ({status})")

    try:
        path = write_template(layout.config_file, overwrite=args.force)
    except ConfigError:
        lines.append(
            f"Config already exists at {layout.config_file} "
            "(use --force to overwrite)"
        )
    else:
        lines.append(f"Wrote config template {path}")

    sys.stdout.write("\n".join(lines) + "\n")
    return 0


if __name__ == "__main__":  # pragma: no cover - module CLI guard
    raise SystemExit(main())
