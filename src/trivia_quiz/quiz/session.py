"""Rich-powered console loop for a trivia quiz.

The loop renders the controller's current state, reads one command per
prompt from an injectable input provider, and returns a
:class:`QuizSessionResult` once the quiz is completed or abandoned.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Literal

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .controller import QuizController, QuizStatus

InputProvider = Callable[[], str]
ExitAction = Literal["completed", "quit", "error"]

__all__ = [
    "QuizSessionResult",
    "SessionCommand",
    "parse_session_command",
    "run_quiz_session",
]


@dataclass(frozen=True)
class QuizSessionResult:
    """Return value from ``run_quiz_session``."""

    score: int
    total: int
    answered: int
    exit_action: ExitAction


@dataclass(frozen=True)
class SessionCommand:
    """Normalized user command parsed from console input."""

    type: Literal["select", "next", "retry", "quit"]
    choice: int | None = None


def parse_session_command(raw: str | None) -> SessionCommand | None:
    """Parse raw input; choices are 1-based numbers."""

    if raw is None:
        return None
    text = raw.strip().lower()
    if not text:
        return None
    if text in {"n", "next"}:
        return SessionCommand("next")
    if text in {"r", "retry"}:
        return SessionCommand("retry")
    if text in {"q", "quit", "exit"}:
        return SessionCommand("quit")
    if text.isdigit():
        return SessionCommand("select", int(text))
    return None


def run_quiz_session(
    controller: QuizController,
    console: Console,
    input_provider: InputProvider,
) -> QuizSessionResult:
    """Load the quiz and play it until completion, quit or input runs out."""

    exit_action: ExitAction = "quit"
    while True:
        if controller.status is QuizStatus.LOADING:
            with console.status("Loading Questions..."):
                controller.load()
            continue

        if controller.status is QuizStatus.COMPLETED:
            _render_question(console, controller)
            _render_summary(console, controller)
            exit_action = "completed"
            break

        if controller.status is QuizStatus.ERROR:
            message = controller.error_message or "Failed to load questions"
            console.print(
                Panel(
                    Text(message),
                    title="Error",
                    border_style="red",
                )
            )
            console.print(Text("Commands: r (retry), q (quit)", style="dim"))
        else:
            _render_question(console, controller)

        try:
            raw = input_provider()
        except (EOFError, KeyboardInterrupt, StopIteration):
            console.print("\n[bold yellow]Session interrupted.[/]")
            exit_action = (
                "error" if controller.status is QuizStatus.ERROR else "quit"
            )
            break

        command = parse_session_command(raw)
        if command is None:
            console.print("[red]Unrecognized command. Try again.[/]")
            continue
        if command.type == "quit":
            console.print("\n[bold yellow]Ending quiz early.[/]")
            exit_action = (
                "error" if controller.status is QuizStatus.ERROR else "quit"
            )
            break
        _apply_command(command, controller, console)

    return QuizSessionResult(
        score=controller.score,
        total=controller.total,
        answered=_answered_count(controller),
        exit_action=exit_action,
    )


def _apply_command(
    command: SessionCommand,
    controller: QuizController,
    console: Console,
) -> None:
    if command.type == "retry":
        if not controller.retry():
            console.print("[red]Nothing to retry.[/]")
        return
    if command.type == "next":
        if not controller.advance():
            console.print("[red]Answer the question before moving on.[/]")
        return
    if command.type == "select" and command.choice is not None:
        question = controller.current
        if question is None or not 1 <= command.choice <= len(
            question.answers
        ):
            console.print(
                f"[red]'{command.choice}' is not a valid choice.[/red]"
            )
            return
        if not controller.select(question.answers[command.choice - 1]):
            console.print("[yellow]You already answered this question.[/]")


def _answered_count(controller: QuizController) -> int:
    if controller.status is QuizStatus.ERROR or not controller.questions:
        return 0
    return controller.index + (1 if controller.selected is not None else 0)


def _render_question(console: Console, controller: QuizController) -> None:
    question = controller.current
    if question is None:
        return
    header = Text.assemble(
        (f"Question {controller.index + 1}", "bold cyan"),
        (f" / {controller.total}", "dim"),
    )
    console.print()
    console.rule(header)
    console.print(
        Text(
            f"{question.category} · {question.difficulty.value}",
            style="dim",
        )
    )
    console.print(Text(question.text, style="bold"))

    table = Table(show_header=False, box=box.SIMPLE, expand=True)
    table.add_column("#", justify="center", style="cyan")
    table.add_column("Answer")

    selected = controller.selected
    for number, answer in enumerate(question.answers, start=1):
        text = Text(answer)
        if selected is not None:
            if question.is_correct(answer):
                text.stylize("bold green")
            elif answer == selected:
                text.stylize("bold red")
        marker = "•" if answer == selected else " "
        table.add_row(str(number), Text(marker + " ") + text)
    console.print(table)

    if selected is not None:
        if controller.last_answer_correct:
            console.print("[bold green]Correct![/]")
        else:
            console.print(
                f"[bold red]Wrong.[/] The answer was "
                f"[bold]{escape(question.correct_answer)}[/]."
            )

    hint = "Commands: 1-{0} (answer), n (next), q (quit)".format(
        len(question.answers)
    )
    console.print(
        Text(
            f"Score {controller.score} / {controller.total} | {hint}",
            style="dim",
        )
    )


def _render_summary(console: Console, controller: QuizController) -> None:
    console.print()
    console.rule(Text("Quiz Completed!", style="bold magenta"))
    overview = Table(show_header=False, box=box.MINIMAL_DOUBLE_HEAD)
    overview.add_column("Metric", style="bold")
    overview.add_column("Value", justify="right")
    overview.add_row("Questions", str(controller.total))
    overview.add_row("Correct", str(controller.score))
    accuracy = controller.score / controller.total if controller.total else 0
    overview.add_row("Accuracy", f"{accuracy * 100:.1f}%")
    console.print(overview)
    console.print(
        f"Your final score: [bold]{controller.score} / {controller.total}[/]"
    )
