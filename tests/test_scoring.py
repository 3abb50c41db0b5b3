from __future__ import annotations

from quiz_core.scoring import compute_skill_levels, dominant_skill
from tests.conftest import answers


def test_max_not_sum_in_either_order(synthetic_bank):
    up = answers(("left-1", "v3"), ("left-1", "v8"))
    down = answers(("left-1", "v8"), ("left-1", "v3"))
    assert compute_skill_levels(up, synthetic_bank) == {"alpha": 8}
    assert compute_skill_levels(down, synthetic_bank) == {"alpha": 8}


def test_answers_without_signal_contribute_nothing(synthetic_bank):
    seq = answers(("start", "left"), ("ghost", "v8"), ("left-1", "bogus"), ("end", "no"))
    assert compute_skill_levels(seq, synthetic_bank) == {}


def test_keys_follow_first_encounter(synthetic_bank):
    seq = answers(("right-1", "v2"), ("left-1", "v7"), ("right-1", "v7"))
    levels = compute_skill_levels(seq, synthetic_bank)
    assert list(levels) == ["beta", "alpha"]
    assert levels == {"beta": 7, "alpha": 7}


def test_tie_goes_to_first_encountered_area(synthetic_bank):
    a_first = compute_skill_levels(answers(("left-1", "v7"), ("right-1", "v7")), synthetic_bank)
    b_first = compute_skill_levels(answers(("right-1", "v7"), ("left-1", "v7")), synthetic_bank)
    assert dominant_skill(a_first) == ("alpha", 7)
    assert dominant_skill(b_first) == ("beta", 7)


def test_strictly_higher_later_area_wins():
    assert dominant_skill({"alpha": 5, "beta": 6}) == ("beta", 6)


def test_dominant_of_empty_map():
    assert dominant_skill({}) == (None, 0)


def test_default_bank_levels(bank):
    seq = answers(("q1", "webdev"), ("q2-webdev", "fullstack"), ("q3-fullstack", "intermediate"))
    assert compute_skill_levels(seq, bank) == {"webdev": 5, "fullstack": 8}


def test_deterministic(bank):
    seq = answers(("q1", "ai"), ("q2-ai", "cv"), ("q3-cv", "advanced"))
    assert compute_skill_levels(seq, bank) == compute_skill_levels(seq, bank)
