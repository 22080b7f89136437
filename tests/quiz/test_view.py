from __future__ import annotations

from types import SimpleNamespace

import pytest

from trivia_quiz.api.errors import TransportError
from trivia_quiz.api.sources import FixtureQuestionSource
from trivia_quiz.quiz import view as qv
from trivia_quiz.quiz.controller import QuizController, QuizStatus


class StubContainer:
    def __init__(self, *_, **kwargs):
        self.id = kwargs.get("id")
        self.children = []

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        return False

    def remove_children(self) -> None:
        self.children.clear()

    def mount(self, *widgets) -> None:
        self.children.extend(widgets)


class StubStatic:
    def __init__(self, text: str, id: str | None = None, **_):
        self.text = text
        self.id = id

    def update(self, new: str) -> None:
        self.text = new


class StubButton:
    def __init__(self, label: str, id: str | None = None, disabled=False):
        self.label = label
        self.id = id
        self.disabled = disabled
        self.classes = set()

    def add_class(self, name: str) -> None:
        self.classes.add(name)


class FailingSource:
    def fetch_questions(self, *args, **kwargs):
        raise TransportError("offline")

    def fetch_categories(self):
        return []


@pytest.fixture
def stub_widgets(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(qv, "Container", StubContainer)
    monkeypatch.setattr(qv, "Vertical", StubContainer)
    monkeypatch.setattr(qv, "Static", StubStatic)
    monkeypatch.setattr(qv, "Button", StubButton)


def _attach_stage(monkeypatch, app):
    holder = StubContainer(id="question-area")
    status = StubStatic("", id="status")
    score = StubStatic("", id="score")
    widgets = {"#question-area": holder, "#status": status, "#score": score}

    def query_one(selector: str, _type):
        if selector in widgets:
            return widgets[selector]
        raise LookupError(selector)

    monkeypatch.setattr(app, "query_one", query_one)
    return holder, status, score


def _loaded_app(amount: int = 2) -> qv.TriviaApp:
    controller = QuizController(FixtureQuestionSource(), amount=amount)
    controller.load()
    return qv.TriviaApp(controller)


def test_compose_while_loading(stub_widgets) -> None:
    app = qv.TriviaApp(QuizController(FixtureQuestionSource()))
    rendered = list(app.compose())
    statics = [w for w in rendered if isinstance(w, StubStatic)]
    assert statics[0].text == "Loading Questions..."
    assert app.score_text() == ""


def test_question_view_renders_answer_buttons(stub_widgets) -> None:
    app = _loaded_app()
    view = qv.QuestionView(app.controller)
    widgets = list(view.compose())
    buttons = [w for w in widgets if isinstance(w, StubButton)]
    question = app.controller.current
    assert [b.label for b in buttons] == list(question.answers)
    assert not any(b.disabled for b in buttons)
    texts = [w.text for w in widgets if isinstance(w, StubStatic)]
    assert question.text in texts
    assert "1/2" in texts


def test_selection_marks_buttons_and_updates_score(
    stub_widgets, monkeypatch
) -> None:
    app = _loaded_app()
    holder, status, score = _attach_stage(monkeypatch, app)
    question = app.controller.current
    wrong = next(a for a in question.answers if not question.is_correct(a))

    assert app.select_answer(question.answers.index(wrong))
    assert not app.select_answer(question.answers.index(question.correct_answer))
    assert not app.select_answer(99)

    assert score.text == "Score: 0 / 2"
    assert status.text == ""
    assert len(holder.children) == 1
    assert isinstance(holder.children[0], qv.QuestionView)
    buttons = [
        w for w in holder.children[0].compose() if isinstance(w, StubButton)
    ]
    classes = {b.label: b.classes for b in buttons}
    assert classes[wrong] == {"wrong"}
    assert classes[question.correct_answer] == {"correct"}
    assert all(b.disabled for b in buttons)


def test_next_and_completion(stub_widgets, monkeypatch) -> None:
    app = _loaded_app(amount=2)
    holder, status, score = _attach_stage(monkeypatch, app)
    controller = app.controller

    assert not app.next_question()
    app.select_answer(controller.current.answers.index(controller.current.correct_answer))
    assert app.next_question()
    app.select_answer(controller.current.answers.index(controller.current.correct_answer))

    assert controller.status is QuizStatus.COMPLETED
    assert app.status_text() == "Quiz Completed! Your final score: 2 / 2"
    assert status.text == app.status_text()
    assert isinstance(holder.children[0], qv.QuestionView)
    assert score.text == "Score: 2 / 2"


def test_error_state_and_retry(stub_widgets, monkeypatch) -> None:
    controller = QuizController(FailingSource())
    controller.load()
    app = qv.TriviaApp(controller)
    holder, status, _ = _attach_stage(monkeypatch, app)
    started = []
    monkeypatch.setattr(
        app, "run_worker", lambda work, **kw: started.append((work, kw))
    )

    assert app.status_text() == "Failed to load questions: offline"
    assert app.retry_quiz()
    assert controller.status is QuizStatus.LOADING
    assert status.text == "Loading Questions..."
    assert holder.children == []
    assert started and started[0][1] == {"thread": True, "exclusive": True}


def test_start_loading_only_from_loading(stub_widgets, monkeypatch) -> None:
    app = _loaded_app()
    monkeypatch.setattr(
        app, "run_worker", lambda *a, **k: pytest.fail("should not load")
    )
    assert not app.start_loading()
    assert not app.retry_quiz()


def test_button_dispatch(stub_widgets, monkeypatch) -> None:
    app = _loaded_app()
    _attach_stage(monkeypatch, app)
    calls = []
    monkeypatch.setattr(app, "select_answer", lambda pos: calls.append(pos))
    monkeypatch.setattr(app, "action_next", lambda: calls.append("next"))
    monkeypatch.setattr(app, "action_retry", lambda: calls.append("retry"))

    for bid in ("answer-2", "next", "retry", "other"):
        app.on_button_pressed(SimpleNamespace(button=SimpleNamespace(id=bid)))

    assert calls == [2, "next", "retry"]
