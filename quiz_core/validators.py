from __future__ import annotations
from typing import Dict, List, Optional, Sequence
from .types import Answer
from .question_bank import QuestionBank, load_bank
from .flow import next_question
from .config import ROOT_QUESTION


def validate_completion(answers: Sequence[Answer], bank: Optional[QuestionBank] = None) -> bool:
    """True when replaying the answers reaches a question with no successor."""

    b = bank if bank is not None else load_bank()
    for ans in answers:
        if ans.question_id not in b:
            continue
        if next_question(ans.question_id, ans.value, b) is None:
            return True
    return False


def debug_flow(answers: Sequence[Answer], bank: Optional[QuestionBank] = None) -> Dict[str, object]:
    b = bank if bank is not None else load_bank()
    issues: List[str] = []
    suggestions: List[str] = []

    if not any(a.question_id == ROOT_QUESTION for a in answers):
        issues.append(f"Missing primary interest question ({ROOT_QUESTION})")
        suggestions.append("Start quiz from the beginning")

    for cur, nxt in zip(answers, answers[1:]):
        if cur.question_id not in b:
            continue
        expected = next_question(cur.question_id, cur.value, b)
        if expected and expected != nxt.question_id:
            issues.append(f"Flow break: {cur.question_id} -> {nxt.question_id} (expected {expected})")
            suggestions.append("Validate question flow logic")

    for idx, ans in enumerate(answers):
        if not b.validate_answer(ans.question_id, ans.value):
            issues.append(f"Invalid answer at position {idx}: {ans.question_id} = {ans.value}")
            suggestions.append("Validate answer options")

    return {"is_valid": not issues, "issues": issues, "suggestions": suggestions}
