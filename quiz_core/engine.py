# quiz_core/engine.py
from __future__ import annotations
import logging
from typing import List, Optional

from .types import Answer, AssessmentResult, QuestionNode
from .question_bank import QuestionBank, load_bank
from .flow import resolve_next
from .progress import estimate_progress
from .recommend import build_result


log = logging.getLogger(__name__)


class InvalidAnswerError(ValueError):
    def __init__(self, question_id: str, value: str):
        super().__init__(f"{value!r} is not an option of question {question_id!r}")
        self.question_id = question_id
        self.value = value


class QuizSession:
    """Drives one assessment: owns the answer list and the current-question cursor."""

    def __init__(self, bank: Optional[QuestionBank] = None, start_id: Optional[str] = None):
        self.bank = bank if bank is not None else load_bank()
        self.answers: List[Answer] = []
        self._cursor: Optional[str] = start_id or self.bank.first_id()
        self._history: List[Optional[str]] = []
        self._result: Optional[AssessmentResult] = None

    @property
    def done(self) -> bool:
        return self._cursor is None

    @property
    def current_id(self) -> Optional[str]:
        return self._cursor

    def current(self) -> Optional[QuestionNode]:
        if self._cursor is None:
            return None
        return self.bank.get(self._cursor)

    def answer_current(self, value: str) -> Optional[str]:
        """Record ``value`` for the current question and advance; returns the next id."""

        qid = self._cursor
        if qid is None:
            raise RuntimeError("quiz already complete")
        if self._result is not None:
            raise RuntimeError("quiz already finalized")
        value = str(value)
        node = self.bank.get(qid)
        if node.options and node.option_for(value) is None:
            raise InvalidAnswerError(qid, value)
        self.answers.append(Answer(question_id=qid, value=value))
        self._history.append(qid)
        self._cursor = resolve_next(qid, value, self.answers, self.bank)
        log.debug("answered %s=%s -> %s", qid, value, self._cursor)
        return self._cursor

    def go_back(self) -> Optional[str]:
        """Drop the last answer and return to its question."""

        if not self.answers or self._result is not None:
            return self._cursor
        self.answers = self.answers[:-1]
        self._cursor = self._history.pop()
        return self._cursor

    def progress(self) -> float:
        if self.done and self.answers:
            return 100.0
        return estimate_progress(self.answers, self.bank)

    def finalize(self) -> AssessmentResult:
        if self._result is None:
            self._result = build_result(self.answers, self.bank)
        return self._result
