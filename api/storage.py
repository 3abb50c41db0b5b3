"""Persistence boundary for finished assessments.

Results are stored as JSON files on disk: one file per result plus an index
keyed by result id.  A second store can mirror every save (``MIRROR_DATA_DIR``)
so a shared volume or synced folder receives a copy.  Saves are independent
and never raise: a failed write is logged and reported as ``False`` while the
in-memory result stays valid.
"""

from __future__ import annotations

import json
import logging
import os
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from quiz_core.types import Answer, AssessmentResult
from quiz_core.config import MIRROR_ENABLED


log = logging.getLogger(__name__)

DATA_ROOT = Path(os.getenv("DATA_DIR", "data")).resolve()
_MIRROR_DIR = os.getenv("MIRROR_DATA_DIR")
MIRROR_ROOT: Optional[Path] = Path(_MIRROR_DIR).resolve() if (_MIRROR_DIR and MIRROR_ENABLED) else None

_LOCK = threading.Lock()


def _read_json(path: Path, default: Any) -> Any:
    if not path.exists():
        return default
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        log.warning("unreadable store file %s: %s", path, exc)
        return default


def _write_json(path: Path, payload: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
    tmp.replace(path)


def utcnow_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class ResultStore:
    """User-scoped result store rooted at one directory."""

    def __init__(self, root: Path):
        self.root = Path(root)
        self.results_dir = self.root / "results"
        self.index_path = self.root / "results_index.json"
        self.sessions_path = self.root / "sessions_active.json"

    # ---- results ----
    def save(self, result: AssessmentResult, answers: Sequence[Answer], user_id: str) -> bool:
        payload = result.to_dict()
        payload["userId"] = user_id
        payload["answers"] = [a.to_dict() for a in answers]
        meta = {
            "userId": user_id,
            "createdAt": result.created_at,
            "badge": result.badge.name,
            "completed": result.completed,
        }
        path = self.results_dir / f"{result.id}.json"
        try:
            # result file first: the index never lists an id without its file
            _write_json(path, payload)
            with _LOCK:
                index: Dict[str, Dict[str, Any]] = _read_json(self.index_path, {})
                index[result.id] = meta
                _write_json(self.index_path, index)
        except (OSError, TypeError, ValueError) as exc:
            log.warning("saving result %s for %s under %s failed: %s", result.id, user_id, self.root, exc)
            self._discard(path)
            return False
        log.info("saved result %s for %s under %s", result.id, user_id, self.root)
        return True

    def _discard(self, path: Path) -> None:
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            log.warning("could not remove orphaned result file %s: %s", path, exc)

    def load_by_id(self, result_id: str) -> Optional[Dict[str, Any]]:
        path = self.results_dir / f"{result_id}.json"
        if not path.exists():
            return None
        return _read_json(path, None)

    def list_for_user(self, user_id: str) -> List[Dict[str, Any]]:
        index: Dict[str, Dict[str, Any]] = _read_json(self.index_path, {})
        out: List[Dict[str, Any]] = []
        for rid, meta in index.items():
            if meta.get("userId") == user_id:
                item = {"id": rid}
                item.update({k: v for k, v in meta.items() if k != "id"})
                out.append(item)
        out.sort(key=lambda r: r.get("createdAt", ""), reverse=True)
        return out

    def load_latest(self, user_id: str) -> Optional[Dict[str, Any]]:
        for meta in self.list_for_user(user_id):
            report = self.load_by_id(meta["id"])
            if report:
                return report
        return None

    def delete_for_user(self, user_id: str) -> bool:
        try:
            with _LOCK:
                index: Dict[str, Dict[str, Any]] = _read_json(self.index_path, {})
                doomed = [rid for rid, meta in index.items() if meta.get("userId") == user_id]
                for rid in doomed:
                    index.pop(rid, None)
                _write_json(self.index_path, index)
            for rid in doomed:
                path = self.results_dir / f"{rid}.json"
                if path.exists():
                    path.unlink()
        except OSError as exc:
            log.warning("deleting results for %s under %s failed: %s", user_id, self.root, exc)
            return False
        log.info("deleted %d result(s) for %s", len(doomed), user_id)
        return True

    # ---- in-flight sessions ----
    def _load_sessions(self) -> Dict[str, Dict[str, Any]]:
        return _read_json(self.sessions_path, {})

    def _write_sessions(self, sessions: Dict[str, Dict[str, Any]], action: str, session_id: str) -> bool:
        try:
            _write_json(self.sessions_path, sessions)
        except (OSError, TypeError, ValueError) as exc:
            log.warning("%s session %s under %s failed: %s", action, session_id, self.root, exc)
            return False
        return True

    def record_session(self, session_id: str, payload: Dict[str, Any]) -> bool:
        if not payload.get("userId"):
            return False
        with _LOCK:
            sessions = self._load_sessions()
            sessions[session_id] = payload
            return self._write_sessions(sessions, "recording", session_id)

    def update_session(self, session_id: str, updates: Dict[str, Any]) -> bool:
        with _LOCK:
            sessions = self._load_sessions()
            if session_id not in sessions:
                return False
            sessions[session_id].update(updates)
            return self._write_sessions(sessions, "updating", session_id)

    def clear_session(self, session_id: str) -> bool:
        with _LOCK:
            sessions = self._load_sessions()
            if session_id not in sessions:
                return True
            sessions.pop(session_id, None)
            return self._write_sessions(sessions, "clearing", session_id)

    def sessions_for_user(self, user_id: str) -> List[Dict[str, Any]]:
        out = [p for p in self._load_sessions().values() if p.get("userId") == user_id]
        out.sort(key=lambda r: r.get("startedAt", ""), reverse=True)
        return out


LOCAL = ResultStore(DATA_ROOT)
MIRROR: Optional[ResultStore] = ResultStore(MIRROR_ROOT) if MIRROR_ROOT else None


def save_result(result: AssessmentResult, answers: Sequence[Answer], user_id: str) -> bool:
    return LOCAL.save(result, answers, user_id)


def load_result(user_id: str) -> Optional[Dict[str, Any]]:
    return LOCAL.load_latest(user_id)


def persist_everywhere(result: AssessmentResult, answers: Sequence[Answer], user_id: str) -> Dict[str, bool]:
    """Save locally and to the mirror; one failing never affects the other."""

    outcome = {"local": save_result(result, answers, user_id)}
    if MIRROR is not None:
        outcome["mirror"] = MIRROR.save(result, answers, user_id)
    return outcome


def has_completed(user_id: str) -> bool:
    return bool(LOCAL.list_for_user(user_id))


def list_results(user_id: str) -> List[Dict[str, Any]]:
    return LOCAL.list_for_user(user_id)


def delete_results(user_id: str) -> bool:
    ok = LOCAL.delete_for_user(user_id)
    if MIRROR is not None:
        MIRROR.delete_for_user(user_id)
    return ok


def user_skill_levels(user_id: str) -> Dict[str, int]:
    res = load_result(user_id)
    return dict(res.get("skillLevels") or {}) if res else {}


def user_badge(user_id: str) -> Optional[Dict[str, str]]:
    res = load_result(user_id)
    return res.get("badge") if res else None


def user_paths(user_id: str) -> Dict[str, Any]:
    res = load_result(user_id)
    if not res:
        return {"paths": [], "analysis": None}
    analysis = {k: res.get(k) for k in ("summary", "skillLevels", "badge", "createdAt")}
    return {"paths": list(res.get("recommendedPaths") or []), "analysis": analysis}


def record_active_session(session_id: str, payload: Dict[str, Any]) -> bool:
    return LOCAL.record_session(session_id, payload)


def update_active_session(session_id: str, updates: Dict[str, Any]) -> bool:
    return LOCAL.update_session(session_id, updates)


def clear_active_session(session_id: str) -> bool:
    return LOCAL.clear_session(session_id)


def active_sessions_for_user(user_id: str) -> List[Dict[str, Any]]:
    return LOCAL.sessions_for_user(user_id)
