from __future__ import annotations
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
import uuid, os, time, logging, typing as t

from quiz_core.engine import QuizSession, InvalidAnswerError
from quiz_core.types import Answer, QuestionNode
from quiz_core.question_bank import load_bank
from quiz_core.recommend import analyze, badge, recommended_paths
from quiz_core.progress import estimate_progress, quiz_summary
from quiz_core.config import SESSION_TTL_MINUTES
from quiz_core.validators import debug_flow
from .storage import (
    active_sessions_for_user,
    clear_active_session,
    delete_results,
    has_completed,
    list_results,
    load_result,
    persist_everywhere,
    record_active_session,
    update_active_session,
    user_badge,
    user_paths,
    user_skill_levels,
    utcnow_iso,
)

log = logging.getLogger(__name__)

SESS: dict[str, QuizSession] = {}
SESSION_INFO: dict[str, dict[str, t.Any]] = {}

app = FastAPI(title="Career Quiz API")


@app.get("/")
def root():
    return {"status": "ok", "service": "career-quiz-api"}


ALLOWED_ORIGINS = [
    o.strip() for o in os.getenv("ALLOWED_ORIGINS", "http://localhost:3000").split(",") if o.strip()
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
    allow_credentials=False,
)

# ---- Schemas ----
class StartReq(BaseModel):
    user_id: str | None = None

class AnswerReq(BaseModel):
    question_id: str | None = None
    value: int | str

class AnswerIn(BaseModel):
    questionId: str
    value: int | str

class AnalyzeReq(BaseModel):
    answers: list[AnswerIn] = []

# ---- Helpers ----
def _serialize_question(node: QuestionNode | None):
    if node is None: return None
    return {
        "id": node.id,
        "text": node.text,
        "type": node.type,
        "options": [{"id": o.id, "text": o.text, "value": o.value} for o in node.options],
        "skillArea": node.skill_area,
        "difficulty": node.difficulty,
    }


def _session(sid: str) -> QuizSession:
    sess = SESS.get(sid)
    if not sess: raise HTTPException(404, "session not found")
    SESSION_INFO.setdefault(sid, {})["last_seen"] = time.monotonic()
    return sess


def _sweep_idle(now: float | None = None) -> int:
    """Forget sessions idle for longer than SESSION_TTL_MINUTES."""
    now = time.monotonic() if now is None else now
    cutoff = now - SESSION_TTL_MINUTES * 60
    idle = [sid for sid, info in SESSION_INFO.items() if info.get("last_seen", now) < cutoff]
    for sid in idle:
        SESS.pop(sid, None)
        info = SESSION_INFO.pop(sid, {})
        if info.get("user_id"):
            clear_active_session(sid)
    if idle:
        log.info("dropped %d idle session(s)", len(idle))
    return len(idle)


def _state(sid: str, sess: QuizSession) -> dict[str, t.Any]:
    return {
        "session_id": sid,
        "done": sess.done,
        "question": _serialize_question(sess.current()),
        "progress": sess.progress(),
        "answered": len(sess.answers),
    }

# ---- Health ----
@app.get("/health")
def health():
    bank = load_bank()
    return {"questions": len(bank), "bank_issues": bank.audit(), "active_sessions": len(SESS)}

@app.get("/questions/{question_id}")
def get_question(question_id: str):
    bank = load_bank()
    if not bank.exists(question_id):
        raise HTTPException(404, "question not found")
    return _serialize_question(bank.get(question_id))

# ---- Quiz session ----
@app.post("/quiz/start")
def start(req: StartReq | None = None):
    req = req or StartReq()
    _sweep_idle()
    sid = str(uuid.uuid4())
    sess = QuizSession()
    SESS[sid] = sess
    started_at = utcnow_iso()
    SESSION_INFO[sid] = {"user_id": req.user_id, "started_at": started_at, "last_seen": time.monotonic()}
    if req.user_id:
        record_active_session(
            sid,
            {
                "sessionId": sid,
                "userId": req.user_id,
                "startedAt": started_at,
                "lastUpdated": started_at,
                "answered": 0,
            },
        )
    return _state(sid, sess)

@app.get("/quiz/{sid}/next")
def quiz_next(sid: str):
    return _state(sid, _session(sid))

@app.post("/quiz/{sid}/answer")
def quiz_answer(sid: str, req: AnswerReq):
    sess = _session(sid)
    if sess.done:
        raise HTTPException(409, "quiz already complete")
    if req.question_id and req.question_id != sess.current_id:
        raise HTTPException(409, f"expected an answer for {sess.current_id}")
    try:
        sess.answer_current(str(req.value))
    except InvalidAnswerError as exc:
        raise HTTPException(400, str(exc))
    meta = SESSION_INFO.get(sid, {})
    if meta.get("user_id"):
        update_active_session(sid, {"lastUpdated": utcnow_iso(), "answered": len(sess.answers)})
    return _state(sid, sess)

@app.post("/quiz/{sid}/back")
def quiz_back(sid: str):
    sess = _session(sid)
    sess.go_back()
    return _state(sid, sess)

@app.post("/quiz/{sid}/finish")
def quiz_finish(sid: str):
    sess = _session(sid)
    info = SESSION_INFO.get(sid, {})
    res = sess.finalize()
    body = res.to_dict()
    body["summaryStats"] = quiz_summary(sess.answers, sess.bank)
    user_id = info.get("user_id")
    if user_id:
        saved = persist_everywhere(res, sess.answers, user_id)
        if not all(saved.values()):
            log.warning("result %s kept in memory only for some stores: %s", res.id, saved)
        body["saved"] = saved
        clear_active_session(sid)
    SESS.pop(sid, None)
    SESSION_INFO.pop(sid, None)
    return body

# ---- Stateless analysis ----
@app.post("/analyze")
def analyze_answers(req: AnalyzeReq):
    answers = [Answer(question_id=a.questionId, value=str(a.value)) for a in req.answers]
    out = analyze(answers)
    out["badge"] = badge(answers).to_dict()
    out["recommendedPaths"] = recommended_paths(answers)
    out["progress"] = estimate_progress(answers)
    out["flow"] = debug_flow(answers)
    return out

# ---- Stored results ----
@app.get("/users/{user_id}/assessment")
def get_assessment(user_id: str):
    res = load_result(user_id)
    if not res:
        raise HTTPException(404, "no assessment for user")
    return res

@app.get("/users/{user_id}/assessment/status")
def assessment_status(user_id: str):
    return {"completed": has_completed(user_id), "results": list_results(user_id)}

@app.delete("/users/{user_id}/assessment")
def delete_assessment(user_id: str):
    if not delete_results(user_id):
        raise HTTPException(500, "could not delete results")
    return {"ok": True}

@app.get("/users/{user_id}/skills")
def get_skills(user_id: str):
    return {"skillLevels": user_skill_levels(user_id)}

@app.get("/users/{user_id}/badge")
def get_badge(user_id: str):
    b = user_badge(user_id)
    if not b:
        raise HTTPException(404, "no badge for user")
    return b

@app.get("/users/{user_id}/paths")
def get_paths(user_id: str):
    return user_paths(user_id)

@app.get("/users/{user_id}/sessions/active")
def list_active_sessions(user_id: str):
    return {"sessions": active_sessions_for_user(user_id)}
