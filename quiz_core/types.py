from __future__ import annotations
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Literal, Any, Tuple
QuestionType = Literal["multiple-choice","scale","open-ended"]
Difficulty = Literal["beginner","intermediate","advanced"]
def _freeze_map(m) -> Mapping:
    return MappingProxyType(dict(m or {}))
@dataclass(frozen=True)
class Option:
    id: str; text: str; value: str
    skill_value: Optional[int] = None
@dataclass(frozen=True)
class QuestionNode:
    id: str; text: str; type: QuestionType
    options: Tuple[Option, ...] = ()
    follow_ups: Mapping[str, str] = field(default_factory=dict)
    skill_area: Optional[str] = None
    difficulty: Optional[Difficulty] = None

    def __post_init__(self):
        # nodes are shared by every session through the cached bank
        object.__setattr__(self, "options", tuple(self.options))
        object.__setattr__(self, "follow_ups", _freeze_map(self.follow_ups))

    def option_for(self, value: str) -> Optional[Option]:
        return next((o for o in self.options if o.value == value), None)
@dataclass(frozen=True)
class Answer:
    question_id: str; value: str

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "Answer":
        qid = d.get("question_id", d.get("questionId", ""))
        return Answer(question_id=str(qid), value=str(d.get("value", "")))

    def to_dict(self) -> Dict[str, str]:
        return {"questionId": self.question_id, "value": self.value}
@dataclass(frozen=True)
class Badge:
    name: str; description: str; icon: str

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "description": self.description, "icon": self.icon}
@dataclass(frozen=True)
class LearnerProfile:
    time_commitment: str; learning_style: str; goal: str
@dataclass(frozen=True)
class AssessmentResult:
    id: str
    created_at: str
    summary: str
    skill_levels: Mapping[str, int]
    recommended_courses: Tuple[str, ...]
    recommended_mentors: Tuple[str, ...]
    badge: Badge
    primary_interest: Optional[str] = None
    level: Literal["advanced","beginner"] = "beginner"
    recommended_paths: Tuple[str, ...] = ()
    profile: Optional[LearnerProfile] = None
    answers: Tuple[Answer, ...] = ()
    completed: bool = False

    def __post_init__(self):
        object.__setattr__(self, "skill_levels", _freeze_map(self.skill_levels))
        for name in ("recommended_courses", "recommended_mentors", "recommended_paths", "answers"):
            object.__setattr__(self, name, tuple(getattr(self, name)))

    def to_dict(self) -> Dict[str, Any]:
        prof = self.profile
        return {
            "id": self.id,
            "createdAt": self.created_at,
            "summary": self.summary,
            "skillLevels": dict(self.skill_levels),
            "recommendedCourses": list(self.recommended_courses),
            "recommendedMentors": list(self.recommended_mentors),
            "badge": self.badge.to_dict(),
            "primaryInterest": self.primary_interest,
            "level": self.level,
            "recommendedPaths": list(self.recommended_paths),
            "profile": {
                "timeCommitment": prof.time_commitment,
                "learningStyle": prof.learning_style,
                "goal": prof.goal,
            } if prof else None,
            "answers": [a.to_dict() for a in self.answers],
            "completed": self.completed,
        }
