# make24/games/core/game_core.py
from __future__ import annotations

import logging
import time
import uuid
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

# ============================================================
# Minimal per-tab game state
# ============================================================

def default_state() -> Dict[str, Any]:
    return {
        "stats": {
            "played": 0,
            "solved": 0,
            "revealed": 0,
            "skipped": 0,
            "total_time": 0,          # seconds spent on solved hands

            "help_hint": 0,
            "help_solve": 0,
            "answer_attempts": 0,
            "answer_correct": 0,
            "answer_wrong": 0,
            "deal_swaps": 0,
        },

        "difficulty": None,
        "current_hand": None,           # {"cards": [...], "values": [...], ...}
        "current_started_at": None,     # per-hand stopwatch start (float epoch)
        "counted_this_puzzle": False,   # first-interaction gate
        "hand_interacted": False,
    }


SESSIONS: Dict[str, Dict[str, Any]] = {}
"""
key: session_id (cookie + optional client_id) -> per-session dict (see default_state()).
In-memory per server process; only the daily score is persisted.
"""


def get_or_create_session_id(req) -> str:
    """
    Stable per-player (and optionally per-tab) session key:
      cookie 'session_id' (if present) else a new uuid4,
      optionally suffixed with ':<client_id>' (arg/body/header) to isolate tabs.
    """
    base = req.cookies.get("session_id") or str(uuid.uuid4())

    client = req.args.get("client_id")
    if not client and req.is_json:
        j = req.get_json(silent=True) or {}
        client = j.get("client_id")
    if not client:
        client = req.headers.get("X-Client-Session")

    if client:
        return f"{base}:{str(client)[:64]}"
    return base


def get_state(session_id: str) -> Dict[str, Any]:
    return SESSIONS.setdefault(session_id, default_state())


def reset_state(session_id: str) -> Dict[str, Any]:
    SESSIONS[session_id] = default_state()
    return SESSIONS[session_id]


def stats_payload(state: Dict[str, Any]) -> Dict[str, Any]:
    s = state.get("stats", {})
    return {
        "played": int(s.get("played", 0)),
        "solved": int(s.get("solved", 0)),
        "revealed": int(s.get("revealed", 0)),
        "skipped": int(s.get("skipped", 0)),
        "total_time": int(s.get("total_time", 0)),
        "help_hint": int(s.get("help_hint", 0)),
        "help_solve": int(s.get("help_solve", 0)),
        "answer_attempts": int(s.get("answer_attempts", 0)),
        "answer_correct": int(s.get("answer_correct", 0)),
        "answer_wrong": int(s.get("answer_wrong", 0)),
        "deal_swaps": int(s.get("deal_swaps", 0)),
    }


# ============================================================
# Timers
# ============================================================

def start_timer(state: Dict[str, Any]) -> None:
    state["current_started_at"] = time.time()


def elapsed_seconds(state: Dict[str, Any]) -> Optional[int]:
    ts = state.get("current_started_at")
    if not ts:
        return None
    return int(time.time() - ts)


def add_elapsed(state: Dict[str, Any]) -> Optional[int]:
    """Fold the running hand's time into total_time and stop the stopwatch."""
    secs = elapsed_seconds(state)
    if secs is not None:
        st = state.setdefault("stats", {})
        st["total_time"] = int(st.get("total_time", 0)) + secs
    state["current_started_at"] = None
    return secs


# ============================================================
# Stats bumpers
# ============================================================

def ensure_played_once(state: Dict[str, Any]) -> None:
    """Increments played on the FIRST interaction (check/help/skip) of a hand."""
    if not state.get("counted_this_puzzle"):
        st = state.setdefault("stats", {})
        st["played"] = int(st.get("played", 0)) + 1
        state["counted_this_puzzle"] = True
        state["hand_interacted"] = True


def bump_solved(state: Dict[str, Any]) -> None:
    st = state.setdefault("stats", {})
    st["solved"] = int(st.get("solved", 0)) + 1


def bump_revealed(state: Dict[str, Any]) -> None:
    st = state.setdefault("stats", {})
    st["revealed"] = int(st.get("revealed", 0)) + 1


def bump_skipped(state: Dict[str, Any]) -> None:
    st = state.setdefault("stats", {})
    st["skipped"] = int(st.get("skipped", 0)) + 1


def bump_help(state: Dict[str, Any], kind: str = "hint") -> None:
    st = state.setdefault("stats", {})
    key = "help_solve" if kind == "solve" else "help_hint"
    st[key] = int(st.get(key, 0)) + 1


def bump_attempt(state: Dict[str, Any], correct: bool) -> None:
    st = state.setdefault("stats", {})
    st["answer_attempts"] = int(st.get("answer_attempts", 0)) + 1
    if correct:
        st["answer_correct"] = int(st.get("answer_correct", 0)) + 1
    else:
        st["answer_wrong"] = int(st.get("answer_wrong", 0)) + 1


def bump_deal_swap(state: Dict[str, Any]) -> None:
    """Dealt, then dealt again without touching the hand."""
    st = state.setdefault("stats", {})
    st["deal_swaps"] = int(st.get("deal_swaps", 0)) + 1


def begin_hand(state: Dict[str, Any], cards: List[Dict[str, Any]], difficulty: str) -> None:
    if state.get("current_hand") and not state.get("hand_interacted"):
        bump_deal_swap(state)
    state["current_hand"] = {
        "cards": cards,
        "values": [c["value"] for c in cards],
        "difficulty": difficulty,
        "solved": False,
        "helped": False,
    }
    state["difficulty"] = difficulty
    state["counted_this_puzzle"] = False
    state["hand_interacted"] = False
    start_timer(state)
    logger.debug("begin_hand values=%s difficulty=%s", state["current_hand"]["values"], difficulty)


__all__ = [
    "SESSIONS", "default_state", "stats_payload",
    "get_or_create_session_id", "get_state", "reset_state",
    "start_timer", "elapsed_seconds", "add_elapsed",
    "ensure_played_once", "bump_solved", "bump_revealed", "bump_skipped",
    "bump_help", "bump_attempt", "bump_deal_swap", "begin_hand",
]
