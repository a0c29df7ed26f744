"""Interview session controller: walks a user through the question bank."""
from __future__ import annotations

import logging
import threading
import uuid
from typing import Callable, List, Optional, Sequence, Tuple

from pydantic import BaseModel, Field

from config.settings import settings

from .questions import QUESTIONS, Question
from .scoring import FitResult, score

logger = logging.getLogger(__name__)

Defer = Callable[[float, Callable[[], None]], None]
CompletionHook = Callable[["InterviewFlow", FitResult], None]


class InvalidOptionError(ValueError):
    """Raised when a selected option does not belong to the current question."""


class FlowSnapshot(BaseModel):
    """Serializable resting state of a flow (no transition pending)."""

    session_id: str
    question_index: int = Field(default=0, ge=0)
    answers: List[str] = Field(default_factory=list)
    showing_results: bool = False


def _timer_defer(delay_s: float, fn: Callable[[], None]) -> None:
    timer = threading.Timer(delay_s, fn)
    timer.daemon = True
    timer.start()


class InterviewFlow:
    """State machine ``Asking(0) -> ... -> Asking(n-1) -> ShowingResults``.

    A selection records its answer at once; the index only moves once the
    transition completes, either immediately (``transition_delay_s == 0``) or
    when ``defer`` fires. The delay defaults to ``settings.TRANSITION_DELAY_MS``.
    Selections made while a transition is pending are ignored.
    """

    def __init__(
        self,
        session_id: Optional[str] = None,
        *,
        questions: Sequence[Question] = QUESTIONS,
        transition_delay_s: Optional[float] = None,
        defer: Optional[Defer] = None,
        on_complete: Optional[CompletionHook] = None,
    ) -> None:
        if not questions:
            raise ValueError("Interview needs at least one question")
        self.session_id = session_id or str(uuid.uuid4())
        self.questions: Tuple[Question, ...] = tuple(questions)
        if transition_delay_s is None:
            transition_delay_s = settings.TRANSITION_DELAY_MS / 1000
        self.transition_delay_s = transition_delay_s
        self._defer = defer or _timer_defer
        self._on_complete = on_complete
        self._lock = threading.Lock()
        self._index = 0
        self._answers: List[str] = []
        self._showing_results = False
        self._pending_token: Optional[int] = None
        self._generation = 0

    @property
    def question_index(self) -> int:
        return self._index

    @property
    def answers(self) -> Tuple[str, ...]:
        return tuple(self._answers)

    @property
    def showing_results(self) -> bool:
        return self._showing_results

    @property
    def pending(self) -> bool:
        return self._pending_token is not None

    @property
    def total_questions(self) -> int:
        return len(self.questions)

    @property
    def current_question(self) -> Optional[Question]:
        if self._showing_results:
            return None
        return self.questions[self._index]

    @property
    def question_number(self) -> int:
        return self._index + 1

    @property
    def progress(self) -> float:
        return (self._index + 1) / self.total_questions * 100

    @property
    def can_go_back(self) -> bool:
        return not self._showing_results and not self.pending and self._index > 0

    def result(self) -> FitResult:
        return score(self._answers)

    def select(self, option_id: str) -> bool:
        """Record ``option_id`` for the current question and start the transition.

        Returns ``False`` without changing anything when results are showing or
        a transition is already pending.
        """

        with self._lock:
            if self._showing_results or self._pending_token is not None:
                return False
            question = self.questions[self._index]
            if option_id not in question.option_ids():
                raise InvalidOptionError(f"Option '{option_id}' is not part of question '{question.id}'")
            self._answers.append(option_id)
            self._generation += 1
            token = self._generation
            self._pending_token = token

        if self.transition_delay_s <= 0:
            self._complete_transition(token)
        else:
            self._defer(self.transition_delay_s, lambda: self._complete_transition(token))
        return True

    def _complete_transition(self, token: int) -> None:
        with self._lock:
            if self._pending_token != token:
                return
            self._pending_token = None
            if self._index < len(self.questions) - 1:
                self._index += 1
                return
            self._showing_results = True
        logger.info("Interview complete session=%s answers=%d", self.session_id, len(self._answers))
        if self._on_complete is not None:
            self._on_complete(self, self.result())

    def go_back(self) -> bool:
        """Step back one question and drop its answer; no-op at the first question."""

        with self._lock:
            if self._showing_results or self._pending_token is not None or self._index == 0:
                return False
            self._index -= 1
            self._answers.pop()
            return True

    def restart(self) -> None:
        with self._lock:
            self._generation += 1
            self._pending_token = None
            self._index = 0
            self._answers = []
            self._showing_results = False

    def snapshot(self) -> FlowSnapshot:
        return FlowSnapshot(
            session_id=self.session_id,
            question_index=self._index,
            answers=list(self._answers),
            showing_results=self._showing_results,
        )

    @classmethod
    def from_snapshot(cls, snap: FlowSnapshot, **kwargs) -> "InterviewFlow":
        flow = cls(snap.session_id, **kwargs)
        if snap.question_index >= flow.total_questions:
            raise ValueError(f"Snapshot index {snap.question_index} out of range")
        expected = snap.question_index + (1 if snap.showing_results else 0)
        if len(snap.answers) != expected:
            raise ValueError("Snapshot answers do not match its question index")
        flow._index = snap.question_index
        flow._answers = list(snap.answers)
        flow._showing_results = snap.showing_results
        return flow


__all__ = ["Defer", "FlowSnapshot", "InterviewFlow", "InvalidOptionError"]
