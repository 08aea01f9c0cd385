from __future__ import annotations

import threading
from typing import Dict, Sequence

from .dictionaries import FUNNEL_CRAFT_QUESTIONS
from .models.answers import FunnelAnswers


class AnswerCollector:
    """Walks the funnel craft questions and keeps one answer per question."""

    def __init__(self, questions: Sequence[str] = FUNNEL_CRAFT_QUESTIONS) -> None:
        self._questions = tuple(questions)
        self._answers: list[str] = []

    @property
    def total(self) -> int:
        return len(self._questions)

    @property
    def index(self) -> int:
        return len(self._answers)

    @property
    def is_complete(self) -> bool:
        return self.index >= self.total

    @property
    def current_prompt(self) -> str | None:
        if self.is_complete:
            return None
        return self._questions[self.index]

    @property
    def answers(self) -> tuple[str, ...]:
        return tuple(self._answers)

    def submit_answer(self, text: str) -> str | None:
        """Record an answer and return the next prompt, or None when done."""
        if not text or not text.strip():
            raise ValueError("Answer must not be empty")
        if self.is_complete:
            raise RuntimeError("All questions have already been answered")
        self._answers.append(text.strip())
        return self.current_prompt

    def to_answers(self) -> FunnelAnswers:
        if not self.is_complete:
            raise RuntimeError(
                f"Only {self.index} of {self.total} questions have been answered"
            )
        return FunnelAnswers.from_list(self._answers)


class CollectorRegistry:
    def __init__(self, questions: Sequence[str] = FUNNEL_CRAFT_QUESTIONS) -> None:
        self._questions = tuple(questions)
        self._collectors: Dict[str, AnswerCollector] = {}
        self._lock = threading.Lock()

    def start(self, account_id: str) -> AnswerCollector:
        with self._lock:
            collector = AnswerCollector(self._questions)
            self._collectors[account_id] = collector
            return collector

    def get(self, account_id: str) -> AnswerCollector | None:
        with self._lock:
            return self._collectors.get(account_id)

    def discard(self, account_id: str) -> None:
        with self._lock:
            self._collectors.pop(account_id, None)


__all__ = ["AnswerCollector", "CollectorRegistry"]
