from __future__ import annotations
import json, importlib.resources as ir
from typing import Any, Dict, Iterable, Iterator, List, Optional
from .types import Option, QuestionNode
from .config import SKILL_MIN, SKILL_MAX


class UnknownQuestionError(KeyError):
    """Raised when a question id is not part of the bank."""

    def __init__(self, question_id: str):
        super().__init__(question_id)
        self.question_id = question_id

    def __str__(self) -> str:
        return f"unknown question id: {self.question_id!r}"


class QuestionBank:
    """Read-only registry of question nodes in authored (linear) order."""

    def __init__(self, nodes: Iterable[QuestionNode]):
        self._nodes: Dict[str, QuestionNode] = {}
        for node in nodes:
            if node.id in self._nodes:
                raise ValueError(f"duplicate question id: {node.id!r}")
            self._nodes[node.id] = node
        self._order: List[str] = list(self._nodes)
        self._pos: Dict[str, int] = {qid: i for i, qid in enumerate(self._order)}

    def __len__(self) -> int:
        return len(self._order)

    def __iter__(self) -> Iterator[QuestionNode]:
        return iter(self._nodes.values())

    def __contains__(self, question_id: object) -> bool:
        return question_id in self._nodes

    def get(self, question_id: str) -> QuestionNode:
        node = self._nodes.get(question_id)
        if node is None:
            raise UnknownQuestionError(question_id)
        return node

    def exists(self, question_id: str) -> bool:
        return question_id in self._nodes

    def ids(self) -> List[str]:
        return list(self._order)

    def first_id(self) -> Optional[str]:
        return self._order[0] if self._order else None

    def position(self, question_id: str) -> int:
        if question_id not in self._pos:
            raise UnknownQuestionError(question_id)
        return self._pos[question_id]

    def validate_answer(self, question_id: str, value: str) -> bool:
        node = self._nodes.get(question_id)
        if node is None or not node.options:
            return False
        return node.option_for(value) is not None

    def audit(self) -> List[str]:
        """Return human-readable authoring issues; empty when the bank is clean."""

        issues: List[str] = []
        for node in self._nodes.values():
            seen_opts: set[str] = set()
            values = {o.value for o in node.options}
            for opt in node.options:
                if opt.id in seen_opts:
                    issues.append(f"{node.id}: duplicate option id {opt.id}")
                seen_opts.add(opt.id)
                if opt.skill_value is not None and not (SKILL_MIN <= opt.skill_value <= SKILL_MAX):
                    issues.append(f"{node.id}: option {opt.id} skill_value {opt.skill_value} out of range")
            for key, target in node.follow_ups.items():
                if target not in self._nodes:
                    issues.append(f"{node.id}: follow-up '{key}' points to missing question {target}")
                if key not in values:
                    issues.append(f"{node.id}: follow-up key '{key}' matches no option value")
        return issues


def _node_from_dict(raw: Dict[str, Any]) -> QuestionNode:
    opts = [
        Option(
            id=str(o["id"]),
            text=str(o.get("text", "")),
            value=str(o["value"]),
            skill_value=(int(o["skill_value"]) if o.get("skill_value") is not None else None),
        )
        for o in raw.get("options") or []
    ]
    return QuestionNode(
        id=str(raw["id"]),
        text=str(raw.get("text", "")),
        type=raw.get("type", "multiple-choice"),
        options=opts,
        follow_ups={str(k): str(v) for k, v in (raw.get("follow_ups") or {}).items()},
        skill_area=raw.get("skill_area"),
        difficulty=raw.get("difficulty"),
    )


def bank_from_dicts(raw: Iterable[Dict[str, Any]]) -> QuestionBank:
    return QuestionBank(_node_from_dict(r) for r in raw)


_DEFAULT_BANK: Optional[QuestionBank] = None


def load_bank() -> QuestionBank:
    global _DEFAULT_BANK
    if _DEFAULT_BANK is None:
        data = ir.files(__package__).joinpath("data").joinpath("questions.json").read_text(encoding="utf-8")
        _DEFAULT_BANK = bank_from_dicts(json.loads(data))
    return _DEFAULT_BANK
