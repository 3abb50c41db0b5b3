from __future__ import annotations
from typing import Dict, List, Optional, Sequence
from .types import Answer
from .question_bank import QuestionBank, load_bank
from .flow import next_question, predict_flow
from .validators import validate_completion
from .config import ROOT_QUESTION, MIN_ANSWERS_PARTIAL


def _remaining(answers: Sequence[Answer], bank: QuestionBank) -> int:
    """Predicted number of questions still ahead of the last answer."""

    if not answers:
        return len(bank)
    last = answers[-1]
    if last.question_id not in bank:
        # off-bank answer: assume everything untouched is still ahead
        touched = {a.question_id for a in answers}
        return sum(1 for qid in bank.ids() if qid not in touched)
    if next_question(last.question_id, last.value, bank) is None:
        return 0
    return len(predict_flow(last.question_id, last.value, bank, limit=len(bank)))


def _raw_progress(answers: Sequence[Answer], bank: QuestionBank) -> float:
    n = len(answers)
    if n == 0:
        return 0.0
    total = n + _remaining(answers, bank)
    return min(100.0, max(0.0, n / total * 100.0))


def estimate_progress(answers: Sequence[Answer], bank: Optional[QuestionBank] = None) -> float:
    """Percent complete in [0, 100].

    The estimate for each prefix uses the current branch's predicted depth;
    the running maximum over prefixes is returned so the indicator never
    moves backwards within a session.
    """

    b = bank if bank is not None else load_bank()
    best = 0.0
    for k in range(1, len(answers) + 1):
        best = max(best, _raw_progress(answers[:k], b))
    return round(best, 1)


def quiz_summary(answers: Sequence[Answer], bank: Optional[QuestionBank] = None) -> Dict[str, object]:
    b = bank if bank is not None else load_bank()
    primary = next((a.value for a in answers if a.question_id == ROOT_QUESTION), None)

    areas: List[str] = []
    for ans in answers:
        if ans.question_id not in b:
            continue
        area = b.get(ans.question_id).skill_area
        if area and area not in areas:
            areas.append(area)

    if validate_completion(answers, b):
        status = "complete"
    elif len(answers) >= MIN_ANSWERS_PARTIAL:
        status = "partial"
    else:
        status = "incomplete"

    return {
        "questions_answered": len(answers),
        "primary_path": primary or "unknown",
        "skill_areas_assessed": areas,
        "completion_status": status,
    }
