from __future__ import annotations

import pytest

from quiz_core.question_bank import QuestionBank, UnknownQuestionError, bank_from_dicts, load_bank
from quiz_core.types import QuestionNode
from tests.conftest import build_synthetic_bank


def test_default_bank_is_authored_in_linear_order(bank):
    ids = bank.ids()
    assert len(bank) == 24
    assert ids[0] == "q1" and bank.first_id() == "q1"
    assert ids[-3:] == ["q4-time", "q5-learning", "q6-goals"]
    assert not bank.get("q6-goals").follow_ups, "Goals question ends the quiz"


def test_default_bank_has_no_authoring_issues(bank):
    assert bank.audit() == []


def test_unknown_id_is_a_hard_error(bank):
    with pytest.raises(UnknownQuestionError) as exc:
        bank.get("q99")
    assert isinstance(exc.value, KeyError)
    assert exc.value.question_id == "q99"
    assert not bank.exists("q99")


def test_skill_values_and_areas_load(bank):
    node = bank.get("q3-fullstack")
    assert node.skill_area == "fullstack"
    assert node.option_for("intermediate").skill_value == 8
    assert bank.get("q1").skill_area is None
    assert bank.get("q4-time").option_for("high").skill_value is None


def test_validate_answer(bank):
    assert bank.validate_answer("q1", "ai")
    assert not bank.validate_answer("q1", "cooking")
    assert not bank.validate_answer("nope", "ai")


def test_audit_reports_dangling_follow_up():
    broken = build_synthetic_bank(broken=True)
    issues = broken.audit()
    assert any("does-not-exist" in line for line in issues)


def test_audit_reports_out_of_range_skill_value_and_unknown_key():
    b = bank_from_dicts([
        {
            "id": "a",
            "text": "A",
            "type": "scale",
            "options": [{"id": "x", "text": "X", "value": "x", "skill_value": 12}],
            "follow_ups": {"y": "a"},
        }
    ])
    issues = b.audit()
    assert any("out of range" in line for line in issues)
    assert any("matches no option value" in line for line in issues)


def test_duplicate_question_ids_rejected():
    node = QuestionNode(id="dup", text="", type="open-ended")
    with pytest.raises(ValueError):
        QuestionBank([node, node])


def test_loaded_nodes_cannot_be_mutated(bank):
    node = bank.get("q1")
    with pytest.raises(TypeError):
        node.follow_ups["webdev"] = "q6-goals"
    with pytest.raises(AttributeError):
        node.options.append(node.options[0])
    assert load_bank().get("q1").follow_ups["webdev"] == "q2-webdev"
