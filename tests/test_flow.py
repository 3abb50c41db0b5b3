from __future__ import annotations

import logging

import pytest

from quiz_core.flow import (
    expected_sequence,
    next_question,
    predict_flow,
    resolve_next,
    safe_next_question,
)
from quiz_core.question_bank import UnknownQuestionError
from quiz_core.types import Answer
from tests.conftest import answers


def test_branch_edges_are_followed(bank):
    assert next_question("q1", "webdev", bank) == "q2-webdev"
    assert next_question("q2-ai", "nlp", bank) == "q3-nlp"
    assert next_question("q3-ml", "never", bank) == "q4-time"


def test_unmapped_value_falls_back_to_linear_order(bank):
    assert next_question("q1", "cooking", bank) == "q2-design"
    assert next_question("q3-uiux", "7", bank) == "q3-graphic"


def test_last_question_ends_the_flow(bank):
    assert next_question("q6-goals", "employment", bank) is None
    assert next_question("q6-goals", "anything", bank) is None


def test_dangling_branch_recovers_through_linear_order(broken_bank, caplog):
    with caplog.at_level(logging.WARNING, logger="quiz_core.flow"):
        nxt = next_question("start", "left", broken_bank)
    assert nxt == "left-1", "Missing follow-up target should fall back to the next authored question"
    assert "does-not-exist" in caplog.text


def test_unknown_current_id_raises(bank):
    with pytest.raises(UnknownQuestionError):
        next_question("ghost", "x", bank)


def test_safe_next_picks_first_untouched_in_linear_order(synthetic_bank):
    seq = answers(("start", "left"), ("left-1", "v3"))
    assert safe_next_question("left-1", seq, synthetic_bank) == "right-1"
    seq = answers(("start", "left"), ("left-1", "v3"), ("right-1", "v2"))
    assert safe_next_question("right-1", seq, synthetic_bank) == "end"


def test_safe_next_returns_none_when_everything_answered(synthetic_bank):
    seq = answers(("start", "left"), ("left-1", "v3"), ("right-1", "v2"), ("end", "no"))
    assert safe_next_question("end", seq, synthetic_bank) is None


def test_safe_next_never_returns_current(synthetic_bank):
    assert safe_next_question("start", [], synthetic_bank) == "left-1"


def test_resolve_next_recovers_from_cycle(broken_bank):
    seq = answers(("start", "right"), ("right-1", "v7"))
    # right-1 -> start is a back edge onto an answered question
    assert resolve_next("right-1", "v7", seq, broken_bank) == "left-1"


def test_resolve_next_recovers_from_unknown_current(synthetic_bank):
    seq = answers(("ghost", "x"))
    assert resolve_next("ghost", "x", seq, synthetic_bank) == "start"


def _walk(bank, start_id):
    seq: list[Answer] = []
    cur = start_id
    steps = 0
    while cur is not None:
        node = bank.get(cur)
        value = node.options[0].value if node.options else ""
        seq.append(Answer(question_id=cur, value=value))
        cur = resolve_next(cur, value, seq, bank)
        steps += 1
        assert steps <= len(bank), "Walk must terminate within the bank size"
    return seq


@pytest.mark.parametrize("fixture_name", ["bank", "synthetic_bank", "broken_bank"])
def test_walk_from_every_question_terminates(fixture_name, request):
    b = request.getfixturevalue(fixture_name)
    for qid in b.ids():
        seq = _walk(b, qid)
        ids = [a.question_id for a in seq]
        assert len(ids) == len(set(ids)), "No question is asked twice"


def test_walk_through_broken_bank_reaches_end(broken_bank):
    seq = _walk(broken_bank, "start")
    assert seq[-1].question_id == "end"


def test_predict_flow_uses_first_options(bank):
    assert predict_flow("q1", "design", bank) == ["q2-design", "q3-uiux", "q4-time", "q5-learning", "q6-goals"]
    assert predict_flow("q5-learning", "video", bank) == ["q6-goals"]
    assert predict_flow("q6-goals", "personal", bank) == []
    assert predict_flow("ghost", "x", bank) == []


def test_predict_flow_respects_limit(bank):
    assert len(predict_flow("q1", "ai", bank, limit=2)) == 2


def test_expected_sequence(bank):
    assert expected_sequence("ai", bank) == ["q1", "q2-ai", "q3-ml", "q4-time", "q5-learning", "q6-goals"]
    assert expected_sequence("webdev", bank)[2] == "q3-frontend"
    assert expected_sequence("other", bank) == ["q1", "q4-time", "q5-learning", "q6-goals"]
