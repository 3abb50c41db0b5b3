# quiz_core/flow.py
from __future__ import annotations
import logging
from typing import List, Optional, Sequence

from .types import Answer
from .question_bank import QuestionBank, UnknownQuestionError, load_bank
from .config import PREDICT_LIMIT, ROOT_QUESTION, TIME_QUESTION, LEARNING_QUESTION, GOAL_QUESTION


log = logging.getLogger(__name__)


def _bank(bank: Optional[QuestionBank]) -> QuestionBank:
    return bank if bank is not None else load_bank()


def _linear_next(bank: QuestionBank, current_id: str) -> Optional[str]:
    order = bank.ids()
    pos = bank.position(current_id)
    return order[pos + 1] if pos + 1 < len(order) else None


def next_question(current_id: str, value: str, bank: Optional[QuestionBank] = None) -> Optional[str]:
    """Return the id that follows ``current_id`` when ``value`` was chosen.

    Branch edges win; otherwise the authored order is followed. ``None``
    means the flow is complete. A branch that points outside the bank is
    logged and treated as if it were absent.
    """

    b = _bank(bank)
    node = b.get(current_id)
    target = node.follow_ups.get(value)
    if target is not None:
        if target in b:
            return target
        log.warning(
            "question %s: follow-up %r -> %s is not in the bank; using linear order",
            current_id, value, target,
        )
    return _linear_next(b, current_id)


def safe_next_question(
    current_id: Optional[str],
    answers: Sequence[Answer],
    bank: Optional[QuestionBank] = None,
) -> Optional[str]:
    """First question in linear order that the answers have not touched yet."""

    b = _bank(bank)
    touched = {a.question_id for a in answers}
    if current_id:
        touched.add(current_id)
    for qid in b.ids():
        if qid not in touched:
            return qid
    return None


def resolve_next(
    current_id: str,
    value: str,
    answers: Sequence[Answer],
    bank: Optional[QuestionBank] = None,
) -> Optional[str]:
    """Navigator step with recovery, as driven by a quiz session.

    Falls back to :func:`safe_next_question` when the current id is unknown
    or the navigator would revisit an answered question, so every step lands
    on an untouched question and a walk ends within ``len(bank)`` steps.
    """

    b = _bank(bank)
    try:
        nxt = next_question(current_id, value, b)
    except UnknownQuestionError as exc:
        log.debug("navigator recovery after %s", exc)
        return safe_next_question(current_id, answers, b)
    if nxt is None:
        return None
    answered = {a.question_id for a in answers}
    if nxt == current_id or nxt in answered:
        log.debug("navigator recovery: %s -> %s already answered", current_id, nxt)
        return safe_next_question(current_id, answers, b)
    return nxt


def predict_flow(
    current_id: str,
    value: str,
    bank: Optional[QuestionBank] = None,
    limit: int = PREDICT_LIMIT,
) -> List[str]:
    """Remaining ids after ``current_id``, assuming the first option is taken at each later step."""

    b = _bank(bank)
    flow: List[str] = []
    try:
        nxt = next_question(current_id, value, b)
    except UnknownQuestionError:
        return flow
    seen = {current_id}
    while nxt is not None and nxt not in seen and len(flow) < limit:
        flow.append(nxt)
        seen.add(nxt)
        node = b.get(nxt)
        first = node.options[0].value if node.options else ""
        nxt = next_question(nxt, first, b)
    return flow


def expected_sequence(primary_interest: str, bank: Optional[QuestionBank] = None) -> List[str]:
    b = _bank(bank)
    if ROOT_QUESTION not in b:
        return []
    root = b.get(ROOT_QUESTION)
    if primary_interest in root.follow_ups:
        return [ROOT_QUESTION] + predict_flow(ROOT_QUESTION, primary_interest, b, limit=len(b))
    tail = [q for q in (TIME_QUESTION, LEARNING_QUESTION, GOAL_QUESTION) if q in b]
    return [ROOT_QUESTION] + tail
