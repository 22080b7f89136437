from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest

TESTS_DIR = Path(__file__).resolve().parent
if str(TESTS_DIR) not in sys.path:
    sys.path.insert(0, str(TESTS_DIR))

ROOT = TESTS_DIR.parent
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from fixtures import (  # noqa: E402
    CATEGORY_URL,
    QUESTION_URL,
    TOKEN_URL,
    FakeClock,
    FakeSession,
)
from trivia_quiz.api.client import TriviaClient  # noqa: E402


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_client(fake_session: FakeSession, fake_clock: FakeClock):
    """Build a ``TriviaClient`` wired to the fake session and clock."""

    def _make(**overrides) -> TriviaClient:
        options = dict(
            base_url=QUESTION_URL,
            token_url=TOKEN_URL,
            category_url=CATEGORY_URL,
            max_retries=3,
            base_delay=1.0,
            cooldown=5.0,
            session=fake_session,
            clock=fake_clock,
            sleep=fake_clock.sleep,
        )
        options.update(overrides)
        return TriviaClient(**options)

    return _make


@pytest.fixture
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Point the workspace at tmp and clear trivia env overrides."""

    home = tmp_path / "home"
    monkeypatch.setenv("TRIVIA_QUIZ_HOME", str(home))
    monkeypatch.delenv("TRIVIA_QUIZ_CONFIG", raising=False)
    monkeypatch.delenv("TRIVIA_QUIZ_FIXTURES", raising=False)
    monkeypatch.chdir(tmp_path)
    yield home
    logger = logging.getLogger("trivia_quiz")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
