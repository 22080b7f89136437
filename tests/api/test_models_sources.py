from __future__ import annotations

import pytest

from trivia_quiz.api import build_question_source
from trivia_quiz.api.client import TriviaClient
from trivia_quiz.api.errors import ApiResponseError
from trivia_quiz.api.models import Category, Difficulty, Question, QuestionType
from trivia_quiz.api.sources import (
    FIXTURE_QUESTIONS,
    FixtureQuestionSource,
)
from trivia_quiz.core.config import load_config


def test_question_from_payload_keeps_raw_text() -> None:
    question = Question.from_payload(
        {
            "category": "Art",
            "type": "boolean",
            "difficulty": "easy",
            "question": "Is%20this%20true%3F",
            "correct_answer": "True",
            "incorrect_answers": ["False"],
        }
    )
    assert question.type is QuestionType.BOOLEAN
    assert question.difficulty is Difficulty.EASY
    assert question.question == "Is%20this%20true%3F"
    assert question.all_answers == ("True", "False")


@pytest.mark.parametrize(
    "payload",
    [
        "not a mapping",
        {"type": "multiple", "difficulty": "easy"},
        {
            "type": "essay",
            "difficulty": "easy",
            "incorrect_answers": [],
        },
    ],
)
def test_question_from_payload_rejects_malformed(payload) -> None:
    with pytest.raises(ApiResponseError):
        Question.from_payload(payload)


def test_category_from_payload() -> None:
    assert Category.from_payload({"id": "9", "name": "GK"}) == Category(9, "GK")
    with pytest.raises(ApiResponseError):
        Category.from_payload({"name": "missing id"})


def test_fixture_source_serves_canned_questions() -> None:
    source = FixtureQuestionSource()
    assert source.fetch_questions(3) == list(FIXTURE_QUESTIONS[:3])
    assert len(source.fetch_questions(50)) == len(FIXTURE_QUESTIONS)
    assert source.fetch_categories()


def test_fixture_questions_have_unique_answers() -> None:
    for question in FIXTURE_QUESTIONS:
        assert len(set(question.all_answers)) == len(question.all_answers)


def test_build_question_source_selects_strategy(isolated_env) -> None:
    config = load_config()
    assert isinstance(build_question_source(config), TriviaClient)
    fixture = build_question_source(config.with_fixtures(True))
    assert isinstance(fixture, FixtureQuestionSource)


def test_build_question_source_applies_retry_settings(isolated_env) -> None:
    config_path = isolated_env.parent / "trivia.toml"
    config_path.write_text(
        "[retry]\nmax_retries = 1\ncooldown_seconds = 0.5\n"
        "[api]\ntimeout_seconds = 3\n",
        encoding="utf-8",
    )
    client = build_question_source(load_config(explicit_path=config_path))
    assert isinstance(client, TriviaClient)
    assert client.max_retries == 1
    assert client.cooldown == 0.5
    assert client.timeout == 3.0
