from __future__ import annotations

import io
import json

from rich.console import Console

from trivia_quiz.api.errors import TransportError
from trivia_quiz.commands import play
from trivia_quiz.quiz import view


class ScriptedConsole(Console):
    def __init__(self, answers):
        super().__init__(record=True, width=100, file=io.StringIO())
        self._answers = list(answers)

    def input(self, *args, **kwargs):  # noqa: D401
        if not self._answers:
            raise EOFError
        return self._answers.pop(0)


class DownSource:
    def fetch_questions(self, *args, **kwargs):
        raise TransportError("network unreachable")

    def fetch_categories(self):
        return []


def _use_console(monkeypatch, answers):
    console = ScriptedConsole(answers)
    monkeypatch.setattr(play, "Console", lambda: console)
    return console


def test_play_with_fixtures_completes(isolated_env, monkeypatch):
    console = _use_console(monkeypatch, ["1", "n", "1"])

    code = play.main(["--fixtures", "--amount", "2"])

    assert code == 0
    output = console.export_text()
    assert "What does CPU stand for?" in output
    assert "What is the capital of Australia?" in output
    assert "Quiz Completed!" in output
    assert "Your final score:" in output
    assert "/ 2" in output

    log_file = isolated_env / "logs" / "trivia_quiz.log"
    records = [
        json.loads(line)
        for line in log_file.read_text(encoding="utf-8").splitlines()
    ]
    finished = [r for r in records if r["message"] == "Quiz finished"]
    assert finished[0]["extra"]["exit_action"] == "completed"
    assert finished[0]["extra"]["total"] == 2


def test_play_fixtures_from_env(isolated_env, monkeypatch):
    monkeypatch.setenv("TRIVIA_QUIZ_FIXTURES", "1")
    console = _use_console(monkeypatch, ["q"])

    assert play.main(["--amount", "1"]) == 0
    assert "Ending quiz early." in console.export_text()


def test_play_rejects_bad_overrides(isolated_env, capsys):
    assert play.main(["--fixtures", "--amount", "99"]) == 2
    assert "quiz.amount" in capsys.readouterr().err


def test_play_reports_missing_config(isolated_env, tmp_path, capsys):
    code = play.main(["--config", str(tmp_path / "nope.toml")])

    assert code == 2
    assert "Config file not found" in capsys.readouterr().err


def test_play_exits_nonzero_when_load_fails(isolated_env, monkeypatch):
    monkeypatch.setattr(
        play, "build_question_source", lambda cfg: DownSource()
    )
    console = _use_console(monkeypatch, [])

    assert play.main(["--amount", "3"]) == 1
    output = console.export_text()
    assert "Failed to load questions: network unreachable" in output
    assert "Session interrupted." in output


def test_play_tui_runs_textual_app(isolated_env, monkeypatch):
    launched = []

    def fake_run(self):
        launched.append(self.controller)

    monkeypatch.setattr(view.TriviaApp, "run", fake_run)
    def no_console():
        raise AssertionError("console mode should not start")

    monkeypatch.setattr(play, "Console", no_console)

    assert play.main(["--fixtures", "--tui", "--difficulty", "hard"]) == 0
    assert len(launched) == 1
    controller = launched[0]
    assert controller.amount == 10
    assert controller.difficulty.value == "hard"
