from __future__ import annotations

from app_cli.run_quiz import main
from quiz_core.question_bank import bank_from_dicts


def _feed(monkeypatch, *replies):
    it = iter(replies)
    monkeypatch.setattr("builtins.input", lambda prompt="": next(it))


def _open_then_choice_bank():
    return bank_from_dicts([
        {"id": "nick", "text": "Your initial?", "type": "open-ended"},
        {
            "id": "pace",
            "text": "Pace?",
            "type": "multiple-choice",
            "options": [
                {"id": "p-s", "text": "Slow", "value": "slow"},
                {"id": "p-f", "text": "Fast", "value": "fast"},
            ],
        },
    ])


def test_b_is_a_valid_open_ended_answer(monkeypatch, capsys):
    _feed(monkeypatch, "b", "1")
    res = main([], bank=_open_then_choice_bank())
    assert [(a.question_id, a.value) for a in res.answers] == [("nick", "b"), ("pace", "fast")]
    assert "Badge: Versatile Learner" in capsys.readouterr().out


def test_b_goes_back_on_option_questions(monkeypatch):
    _feed(monkeypatch, "x", "b", "y", "0")
    res = main([], bank=_open_then_choice_bank())
    assert [(a.question_id, a.value) for a in res.answers] == [("nick", "y"), ("pace", "slow")]
