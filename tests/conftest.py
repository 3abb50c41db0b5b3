from __future__ import annotations

import pytest

from quiz_core.question_bank import QuestionBank, bank_from_dicts, load_bank
from quiz_core.types import Answer


def build_synthetic_bank(*, broken: bool = False) -> QuestionBank:
    """Small deterministic branching bank; ``broken`` adds a dangling edge and a cycle."""

    raw = [
        {
            "id": "start",
            "text": "Pick a side",
            "type": "multiple-choice",
            "options": [
                {"id": "s-l", "text": "Left", "value": "left"},
                {"id": "s-r", "text": "Right", "value": "right"},
            ],
            "follow_ups": {"left": "left-1", "right": "right-1"},
        },
        {
            "id": "left-1",
            "text": "Alpha skill",
            "type": "scale",
            "options": [
                {"id": "l-3", "text": "Low", "value": "v3", "skill_value": 3},
                {"id": "l-7", "text": "Mid", "value": "v7", "skill_value": 7},
                {"id": "l-8", "text": "High", "value": "v8", "skill_value": 8},
            ],
            "follow_ups": {"v3": "end", "v7": "end", "v8": "end"},
            "skill_area": "alpha",
        },
        {
            "id": "right-1",
            "text": "Beta skill",
            "type": "scale",
            "options": [
                {"id": "r-2", "text": "Low", "value": "v2", "skill_value": 2},
                {"id": "r-7", "text": "Mid", "value": "v7", "skill_value": 7},
            ],
            "follow_ups": {"v2": "end", "v7": "end"},
            "skill_area": "beta",
        },
        {
            "id": "end",
            "text": "Anything else?",
            "type": "multiple-choice",
            "options": [{"id": "e-n", "text": "No", "value": "no"}],
        },
    ]
    if broken:
        raw[0]["follow_ups"]["left"] = "does-not-exist"
        raw[2]["follow_ups"]["v7"] = "start"
    return bank_from_dicts(raw)


def answers(*pairs: tuple[str, str]) -> list[Answer]:
    return [Answer(question_id=q, value=v) for q, v in pairs]


FULL_WEBDEV_PATH = [
    ("q1", "webdev"),
    ("q2-webdev", "fullstack"),
    ("q3-fullstack", "intermediate"),
    ("q4-time", "high"),
    ("q5-learning", "mentor"),
    ("q6-goals", "employment"),
]


@pytest.fixture
def bank() -> QuestionBank:
    return load_bank()


@pytest.fixture
def synthetic_bank() -> QuestionBank:
    return build_synthetic_bank()


@pytest.fixture
def broken_bank() -> QuestionBank:
    return build_synthetic_bank(broken=True)
