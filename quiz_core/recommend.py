from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .types import Answer, AssessmentResult, Badge, LearnerProfile
from .question_bank import QuestionBank
from .scoring import compute_skill_levels, dominant_skill
from .validators import validate_completion
from .config import (
    ADVANCED_THRESHOLD,
    PATHS_ADVANCED_THRESHOLD,
    MAX_RECOMMENDED_PATHS,
    ROOT_QUESTION,
    TIME_QUESTION,
    LEARNING_QUESTION,
    GOAL_QUESTION,
    DEFAULT_TIME,
    DEFAULT_LEARNING,
    DEFAULT_GOAL,
)

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class SkillFamily:
    key: str
    areas: Tuple[str, ...]
    summary: str
    courses: Tuple[str, ...]
    mentors: Tuple[str, ...]
    advanced: Badge
    beginner: Badge

    def badge_for(self, score: int) -> Badge:
        return self.advanced if score >= ADVANCED_THRESHOLD else self.beginner


FAMILIES: Tuple[SkillFamily, ...] = (
    SkillFamily(
        key="design",
        areas=("design", "uiux", "graphic", "animation", "photo"),
        summary="You have a creative eye and a clear pull towards visual design and user experience.",
        courses=("UI/UX Design Principles", "Graphic Design Essentials", "Portfolio Development"),
        mentors=("Matthew Olifant",),
        advanced=Badge("Design Master", "You have exceptional design skills and creative vision", "palette"),
        beginner=Badge("Design Explorer", "You're beginning your creative journey with great potential", "lightbulb"),
    ),
    SkillFamily(
        key="ai",
        areas=("ai", "python", "nlp", "cv", "data-analytics"),
        summary="You are drawn to data, automation and intelligent systems.",
        courses=("Python Fundamentals", "Machine Learning Fundamentals", "Data Analysis with Pandas"),
        mentors=("Sandile Thamie Mhlanga", "Realeboha Nthathakane"),
        advanced=Badge("Data Scientist", "You have advanced knowledge in AI, data science and analytics", "brain"),
        beginner=Badge("AI Novice", "You're starting your journey into the world of data and AI", "cpu"),
    ),
    SkillFamily(
        key="marketing",
        areas=("marketing", "social", "content", "seo", "email"),
        summary="You have a knack for audiences, storytelling and digital growth.",
        courses=("Digital Marketing Basics", "Social Media Strategy", "SEO Optimization"),
        mentors=("Dichwanyo Makgothi",),
        advanced=Badge("Marketing Strategist", "You have advanced expertise in digital marketing and strategy", "trending-up"),
        beginner=Badge("Brand Ambassador", "You're developing your marketing and communication skills", "megaphone"),
    ),
    SkillFamily(
        key="webdev",
        areas=("webdev", "frontend", "backend", "fullstack", "mobile"),
        summary="You enjoy building for the web and turning ideas into working software.",
        courses=("Web Development Bootcamp", "React Fundamentals", "Backend with Node.js"),
        mentors=("Tsehla Motjolopane",),
        advanced=Badge("Code Craftsman", "You have solid, hands-on web development expertise", "code"),
        beginner=Badge("Code Explorer", "You're building your foundation in web technologies", "globe"),
    ),
)

_VERSATILE = Badge("Versatile Learner", "You have diverse interests and a growth mindset", "star")

DEFAULT_FAMILY = SkillFamily(
    key="general",
    areas=(),
    summary="Your interests span several areas, so a broad foundation will help you find your focus.",
    courses=("Digital Literacy", "Creative Thinking", "Project Management"),
    mentors=("Keletso Ntseno",),
    advanced=_VERSATILE,
    beginner=_VERSATILE,
)

_AREA_TO_FAMILY: Dict[str, SkillFamily] = {area: fam for fam in FAMILIES for area in fam.areas}


def family_for(area: Optional[str]) -> SkillFamily:
    if not area:
        return DEFAULT_FAMILY
    return _AREA_TO_FAMILY.get(area, DEFAULT_FAMILY)


def _classify(answers: Sequence[Answer], bank: Optional[QuestionBank]) -> Tuple[Dict[str, int], Optional[str], int, SkillFamily]:
    levels = compute_skill_levels(answers, bank)
    area, score = dominant_skill(levels)
    return levels, area, score, family_for(area)


def analyze(answers: Sequence[Answer], bank: Optional[QuestionBank] = None) -> Dict[str, Any]:
    levels, _area, _score, fam = _classify(answers, bank)
    return {
        "summary": fam.summary,
        "skillLevels": levels,
        "recommendedCourses": list(fam.courses),
        "recommendedMentors": list(fam.mentors),
    }


def badge(answers: Sequence[Answer], bank: Optional[QuestionBank] = None) -> Badge:
    _levels, _area, score, fam = _classify(answers, bank)
    return fam.badge_for(score)


def _answer_value(answers: Sequence[Answer], question_id: str) -> Optional[str]:
    return next((a.value for a in answers if a.question_id == question_id), None)


def learner_profile(answers: Sequence[Answer]) -> LearnerProfile:
    return LearnerProfile(
        time_commitment=_answer_value(answers, TIME_QUESTION) or DEFAULT_TIME,
        learning_style=_answer_value(answers, LEARNING_QUESTION) or DEFAULT_LEARNING,
        goal=_answer_value(answers, GOAL_QUESTION) or DEFAULT_GOAL,
    )


# ---- learning paths ----
_SUB_PATHS: Dict[str, Dict[str, Tuple[str, ...]]] = {
    "design": {
        "graphic": ("Graphic Design Professional", "Digital Marketing Professional"),
        "photo": ("Photography Mastery", "Digital Marketing Professional"),
        "": ("Creative Design Fundamentals", "Frontend Development Mastery"),
    },
    "ai": {
        "nlp": ("Natural Language Processing", "AI Application Development"),
        "cv": ("Computer Vision & Image AI", "AI Application Development"),
        "": ("Data Science Fundamentals", "AI Application Development"),
    },
    "marketing": {
        "social": ("Social Media Marketing", "Digital Marketing Professional"),
        "content": ("Content Marketing Mastery", "Digital Marketing Professional"),
        "seo": ("SEO & Analytics", "Digital Marketing Professional"),
        "email": ("Email Marketing Automation", "Digital Marketing Professional"),
        "": ("Digital Marketing Professional", "Content Creation"),
    },
    "webdev": {
        "mobile": ("Mobile App Development", "React Native Development"),
        "": ("Frontend Development Mastery", "Full-Stack Web Development"),
    },
}

# sub-interests whose paths depend on the learner's level: (advanced, otherwise)
_LEVELLED_PATHS: Dict[Tuple[str, str], Tuple[Tuple[str, ...], Tuple[str, ...]]] = {
    ("design", "uiux"): (("Advanced UI/UX Design", "Design Systems Mastery"),
                         ("UI/UX Design Fundamentals", "Frontend Development Mastery")),
    ("ai", "ml-basics"): (("Advanced Machine Learning", "Data Science Professional"),
                          ("Data Science Fundamentals", "Python Programming")),
    ("webdev", "frontend"): (("Advanced Frontend Development", "Full-Stack Web Development"),
                             ("Frontend Development Mastery", "JavaScript Fundamentals")),
    ("webdev", "backend"): (("Advanced Backend Development", "Cloud-Native Development"),
                            ("Backend Development", "Database Design")),
    ("webdev", "fullstack"): (("Full-Stack Web Development", "Cloud-Native Development"),
                              ("Full-Stack Web Development", "Frontend Development Mastery")),
}

# third-level answers that pick the path directly
_DETAIL_PATHS: Dict[Tuple[str, str], Dict[str, Tuple[str, ...]]] = {
    ("design", "animation"): {
        "3d": ("3D Modeling & Animation", "Game Development"),
        "2d": ("Motion Graphics & 2D Animation", "Digital Marketing Professional"),
        "video": ("Video Production & Editing", "Content Creation Mastery"),
        "character": ("Character Animation", "Game Development"),
        "": ("Animation & Motion Graphics", "Creative Media Production"),
    },
    ("ai", "data-analytics"): {
        "advanced": ("Advanced Business Intelligence", "Data Strategy & Leadership"),
        "intermediate": ("SQL & Database Analytics", "Business Intelligence Professional"),
        "": ("Data Analytics Fundamentals", "Excel to Python Transition"),
    },
}

_GOAL_PATHS: Dict[str, Tuple[str, ...]] = {
    "freelance": ("Freelancer Success Path", "Business & Client Management"),
    "employment": ("Job Readiness Program", "Interview & Portfolio Preparation"),
    "business": ("Entrepreneurship Bootcamp", "Startup Fundamentals"),
}

_TIME_PATHS: Dict[str, Tuple[str, ...]] = {
    "intensive": ("Accelerated Learning Track", "Bootcamp Programs"),
    "low": ("Part-Time Learning Path", "Micro-Learning Modules"),
}

_STYLE_PATHS: Dict[str, Tuple[str, ...]] = {
    "mentor": ("Mentored Project Development", "1-on-1 Coaching Program"),
    "interactive": ("Hands-On Workshop Series", "Project-Based Learning"),
}

_GENERAL_PATHS: Tuple[str, ...] = ("Digital Literacy Fundamentals", "Creative Thinking & Problem Solving")
_ADVANCED_PATHS: Tuple[str, ...] = ("Cloud-Native Development", "Leadership & Mentoring")


def _interest_paths(interest: Optional[str], answers: Sequence[Answer], max_skill: int) -> Tuple[str, ...]:
    if interest not in _SUB_PATHS:
        return _GENERAL_PATHS
    sub = _answer_value(answers, f"q2-{interest}") or ""
    levelled = _LEVELLED_PATHS.get((interest, sub))
    if levelled:
        return levelled[0] if max_skill >= ADVANCED_THRESHOLD else levelled[1]
    detail = _DETAIL_PATHS.get((interest, sub))
    if detail:
        pick = _answer_value(answers, f"q3-{sub}") or ""
        return detail.get(pick, detail[""])
    table = _SUB_PATHS[interest]
    return table.get(sub, table[""])


def recommended_paths(answers: Sequence[Answer], bank: Optional[QuestionBank] = None) -> List[str]:
    """Learning-path names for the learner, most specific first, capped at MAX_RECOMMENDED_PATHS."""

    levels = compute_skill_levels(answers, bank)
    max_skill = max(levels.values(), default=0)
    profile = learner_profile(answers)
    interest = _answer_value(answers, ROOT_QUESTION)

    out: List[str] = list(_interest_paths(interest, answers, max_skill))
    out.extend(_GOAL_PATHS.get(profile.goal, ()))
    out.extend(_TIME_PATHS.get(profile.time_commitment, ()))
    if max_skill >= PATHS_ADVANCED_THRESHOLD:
        out.extend(_ADVANCED_PATHS)
    out.extend(_STYLE_PATHS.get(profile.learning_style, ()))

    unique = list(dict.fromkeys(out))
    return unique[:MAX_RECOMMENDED_PATHS]


def build_result(answers: Sequence[Answer], bank: Optional[QuestionBank] = None) -> AssessmentResult:
    """Assemble the final, immutable result for a finished (or abandoned) flow."""

    answers = list(answers)
    levels, area, score, fam = _classify(answers, bank)
    completed = validate_completion(answers, bank)
    if not completed:
        log.info("assessment submitted before the flow ended (%d answers)", len(answers))
    return AssessmentResult(
        id=str(uuid.uuid4()),
        created_at=datetime.now(timezone.utc).isoformat(),
        summary=fam.summary,
        skill_levels=levels,
        recommended_courses=fam.courses,
        recommended_mentors=fam.mentors,
        badge=fam.badge_for(score),
        primary_interest=area,
        level=("advanced" if score >= ADVANCED_THRESHOLD else "beginner"),
        recommended_paths=recommended_paths(answers, bank),
        profile=learner_profile(answers),
        answers=answers,
        completed=completed,
    )
