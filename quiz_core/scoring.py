from __future__ import annotations
from typing import Dict, Optional, Sequence, Tuple
from .types import Answer
from .question_bank import QuestionBank, load_bank


def compute_skill_levels(answers: Sequence[Answer], bank: Optional[QuestionBank] = None) -> Dict[str, int]:
    """Per-skill-area maximum of the chosen options' skill values.

    Keys keep first-encounter order across ``answers``; repeated weaker
    answers never lower an area's score.
    """

    b = bank if bank is not None else load_bank()
    levels: Dict[str, int] = {}
    for ans in answers:
        if ans.question_id not in b:
            continue
        node = b.get(ans.question_id)
        if not node.skill_area:
            continue
        opt = node.option_for(ans.value)
        if opt is None or opt.skill_value is None:
            continue
        levels[node.skill_area] = max(levels.get(node.skill_area, 0), int(opt.skill_value))
    return levels


def dominant_skill(skill_levels: Dict[str, int]) -> Tuple[Optional[str], int]:
    best: Optional[str] = None; best_val = 0
    for area, val in skill_levels.items():
        # strict comparison keeps the earliest area on ties
        if val > best_val:
            best, best_val = area, val
    return best, best_val
