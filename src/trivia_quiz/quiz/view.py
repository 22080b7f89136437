from typing import List

from textual.app import App, ComposeResult
from textual.containers import Container, Vertical
from textual.widget import Widget
from textual.widgets import Button, Static

from .controller import QuizController, QuizStatus


class TriviaApp(App):
    """Textual front-end: answer buttons, Next and Retry."""

    CSS_PATH = None
    CSS = """
#answers Button { width: 100%; margin: 0 0 1 0; }
#answers Button.correct { background: $success; }
#answers Button.wrong { background: $error; }
#question-area { height: auto; }
#answers { height: auto; }
#status { height: auto; margin: 1 0; }
#footer { height: auto; }
"""
    BINDINGS = [
        ("n", "next", "Next"),
        ("r", "retry", "Retry"),
        ("q", "quit", "Quit"),
    ]

    def __init__(self, controller: QuizController):
        super().__init__()
        self.controller = controller

    def compose(self) -> ComposeResult:
        with Container(id="stage"):
            with Container(id="question-area"):
                yield from self._question_widgets()
            yield Static(self.status_text(), id="status", markup=False)
        with Container(id="footer"):
            yield Static(self.score_text(), id="score")
            yield Button("Next Question", id="next")
            yield Button("Retry", id="retry")

    def on_mount(self) -> None:
        self.start_loading()

    # Pure helpers (testable without running the App)
    def start_loading(self) -> bool:
        if (
            self.controller.status is not QuizStatus.LOADING
            or self.controller.is_fetching
        ):
            return False
        self.run_worker(self._load_in_thread, thread=True, exclusive=True)
        return True

    def select_answer(self, position: int) -> bool:
        question = self.controller.current
        if question is None or not 0 <= position < len(question.answers):
            return False
        accepted = self.controller.select(question.answers[position])
        self._update_stage()
        return accepted

    def next_question(self) -> bool:
        moved = self.controller.advance()
        self._update_stage()
        return moved

    def retry_quiz(self) -> bool:
        if not self.controller.retry():
            return False
        self._update_stage()
        self.start_loading()
        return True

    def score_text(self) -> str:
        if self.controller.status in (QuizStatus.LOADING, QuizStatus.ERROR):
            return ""
        return f"Score: {self.controller.score} / {self.controller.total}"

    def status_text(self) -> str:
        status = self.controller.status
        if status is QuizStatus.LOADING:
            return "Loading Questions..."
        if status is QuizStatus.ERROR:
            return self.controller.error_message or "Failed to load questions"
        if status is QuizStatus.COMPLETED:
            return (
                "Quiz Completed! Your final score: "
                f"{self.controller.score} / {self.controller.total}"
            )
        return ""

    def _load_in_thread(self) -> None:
        self.controller.load()
        self.call_from_thread(self._update_stage)

    def _question_widgets(self) -> List[Widget]:
        if self.controller.status in (QuizStatus.READY, QuizStatus.COMPLETED):
            return [QuestionView(self.controller)]
        return []

    def _update_stage(self) -> None:
        # Removal finishes after this returns: only the id-less QuestionView
        # is remounted, #status is updated in place.
        try:
            holder = self.query_one("#question-area", Container)
            status = self.query_one("#status", Static)
        except Exception:
            return
        holder.remove_children()
        widgets = self._question_widgets()
        if widgets:
            holder.mount(*widgets)
        status.update(self.status_text())
        try:
            self.query_one("#score", Static).update(self.score_text())
        except Exception:
            pass

    def action_next(self) -> None:
        self.next_question()

    def action_retry(self) -> None:
        self.retry_quiz()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        bid = getattr(event.button, "id", "") or ""
        if bid.startswith("answer-"):
            self.select_answer(int(bid.split("-", 1)[1]))
        elif bid == "next":
            self.action_next()
        elif bid == "retry":
            self.action_retry()


class QuestionView(Widget):
    """The current question with one button per answer."""

    DEFAULT_CSS = "QuestionView { height: auto; }"

    def __init__(self, controller: QuizController) -> None:
        super().__init__()
        self.controller = controller

    def compose(self) -> ComposeResult:
        question = self.controller.current
        if question is None:
            return
        yield Static(
            f"{question.category} ({question.difficulty.value})",
            id="category",
            markup=False,
        )
        yield Static(question.text, id="question", markup=False)
        selected = self.controller.selected
        with Vertical(id="answers"):
            for position, answer in enumerate(question.answers):
                btn = Button(
                    answer,
                    id=f"answer-{position}",
                    disabled=selected is not None,
                )
                css_class = self.answer_class(answer)
                if css_class:
                    btn.add_class(css_class)
                yield btn
        prog = f"{self.controller.index + 1}/{self.controller.total}"
        yield Static(prog, id="progress")

    def answer_class(self, answer: str) -> str:
        """Styling for an answer once a selection was made."""

        question = self.controller.current
        selected = self.controller.selected
        if question is None or selected is None:
            return ""
        if question.is_correct(answer):
            return "correct"
        if answer == selected:
            return "wrong"
        return ""
