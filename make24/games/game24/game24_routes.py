# make24/games/game24/game24_routes.py
from __future__ import annotations

import logging
import random
from typing import Any, Dict, List, Optional

from flask import Blueprint, current_app, g, jsonify, request

from make24 import limiter
from make24.games.core.coerce_utils import coerce_number_list
from make24.games.core.game_core import (
    add_elapsed,
    begin_hand,
    bump_attempt,
    bump_help,
    bump_revealed,
    bump_skipped,
    bump_solved,
    elapsed_seconds,
    ensure_played_once,
    get_or_create_session_id,
    get_state,
    reset_state,
    stats_payload,
)
from make24.games.game24.daily_score import get_daily_score, increment_daily_score
from make24.games.game24.logic.dealer import Difficulty, draw_cards
from make24.games.game24.logic.evaluator import check_answer
from make24.games.game24.logic.solver import solve

logger = logging.getLogger(__name__)
bp = Blueprint("game24", __name__, url_prefix="/games/game24")

IMPOSSIBLE_MESSAGE = "Impossible set. Skipping..."

# -----------------------------------------------------------------------------
# Small per-request helpers
# -----------------------------------------------------------------------------
def _sid() -> str:
    sid = getattr(g, "game24_sid", None)
    if sid is None:
        sid = get_or_create_session_id(request)
        g.game24_sid = sid
    return sid

def _player_key() -> str:
    # daily score is per player, not per tab
    return _sid().split(":", 1)[0]

def _state() -> Dict[str, Any]:
    return get_state(_sid())

def _bad(reason: str, status: int = 400):
    return jsonify({"ok": False, "reason": reason}), status

def _hand_values(state: Dict[str, Any], data: Dict[str, Any]) -> List[float]:
    """Values from the request body, else the current hand's."""
    if "values" in data:
        return coerce_number_list(data.get("values"))
    hand = state.get("current_hand") or {}
    return coerce_number_list(hand.get("values"))

def _dealt_hand(state: Dict[str, Any], values: List[float]) -> Optional[Dict[str, Any]]:
    """The current hand, if `values` are its cards (in any order)."""
    hand = state.get("current_hand")
    if not hand:
        return None
    if sorted(values) != sorted(coerce_number_list(hand.get("values"))):
        return None
    return hand

def _rng() -> Optional[random.Random]:
    seed = request.args.get("seed")
    if seed is None:
        return None
    return random.Random(int(seed))

@bp.after_request
def _remember_session(resp):
    if "session_id" not in request.cookies and getattr(g, "game24_sid", None):
        resp.set_cookie("session_id", _player_key(), httponly=True, samesite="Lax")
    return resp

# -----------------------------------------------------------------------------
# API: Next (deal)
# -----------------------------------------------------------------------------
@bp.get("/api/next")
def api_next():
    state = _state()
    level = (
        request.args.get("difficulty")
        or request.args.get("level")
        or state.get("difficulty")
        or current_app.config["GAME24_DEFAULT_DIFFICULTY"]
    )
    try:
        difficulty = Difficulty.parse(level)
        rng = _rng()
    except ValueError as e:
        return _bad(str(e))

    cards = draw_cards(
        current_app.config["GAME24_HAND_SIZE"],
        difficulty,
        rng=rng,
        max_attempts=current_app.config["GAME24_MAX_DEAL_ATTEMPTS"],
    )
    payload_cards = [c.to_dict() for c in cards]
    values = [c.value for c in cards]

    # the dealer's fallback hand may be unsolvable; let the client redraw
    solvable = solve(values).solvable
    if not solvable:
        logger.warning("Dealt unsolvable fallback hand %s", values)

    begin_hand(state, payload_cards, difficulty.value)
    logger.info("api_next sid=%s difficulty=%s values=%s", _sid(), difficulty.value, values)

    return jsonify({
        "ok": True,
        "cards": payload_cards,
        "values": values,
        "difficulty": difficulty.value,
        "solvable": solvable,
        "stats": stats_payload(state),
        "daily_score": get_daily_score(_player_key()),
    }), 200

# -----------------------------------------------------------------------------
# API: Check
# -----------------------------------------------------------------------------
@bp.post("/api/check")
@limiter.limit("60 per minute")
def api_check():
    state = _state()
    data = request.get_json(silent=True) or {}
    answer = str(data.get("answer") or "").strip()
    values = _hand_values(state, data)

    if not values:
        return _bad("Missing or invalid values")
    if not answer:
        return _bad("Missing answer")

    ensure_played_once(state)
    result = check_answer(answer, values)
    bump_attempt(state, correct=result.correct)
    logger.info("api_check values=%s answer=%r correct=%s", values, answer, result.correct)

    if not result.correct:
        return jsonify({
            "ok": False,
            "kind": result.kind,
            "reason": result.reason,
            "value": result.value,
            "stats": stats_payload(state),
        }), 200

    # a win counts once, and only on the hand that was dealt
    hand = _dealt_hand(state, values)
    counted = hand is not None and not hand.get("solved")
    if counted:
        bump_solved(state)
        hand["solved"] = True
        elapsed = add_elapsed(state)
        daily = increment_daily_score(_player_key())
    else:
        elapsed = None
        daily = get_daily_score(_player_key())
        logger.debug("api_check win not counted (dealt=%s)", hand is not None)

    return jsonify({
        "ok": True,
        "kind": result.kind,
        "message": result.reason,
        "value": result.value,
        "counted": counted,
        "elapsed": elapsed,
        "daily_score": daily,
        "stats": stats_payload(state),
    }), 200

# -----------------------------------------------------------------------------
# API: Help (first-step hint or full solution)
# -----------------------------------------------------------------------------
@bp.post("/api/help")
def api_help():
    state = _state()
    data = request.get_json(silent=True) or {}
    kind = str(data.get("kind") or "hint").strip().lower()
    values = _hand_values(state, data)

    if kind not in ("hint", "solve"):
        return _bad(f"Unknown help kind: {kind}")
    if not values:
        return _bad("Missing or invalid values")

    ensure_played_once(state)
    bump_help(state, kind)
    hand = state.get("current_hand")
    if hand:
        hand["helped"] = True

    result = solve(values)
    if not result.solvable:
        logger.info("api_help values=%s: no solution", values)
        return jsonify({
            "ok": True,
            "has_solution": False,
            "message": IMPOSSIBLE_MESSAGE,
            "stats": stats_payload(state),
        }), 200

    payload: Dict[str, Any] = {"ok": True, "has_solution": True, "kind": kind}
    if kind == "solve":
        bump_revealed(state)
        payload["solution"] = result.solution
        payload["message"] = f"Solution: {result.solution}"
    else:
        payload["hint"] = result.first_step_hint
        payload["message"] = result.first_step_hint
    payload["stats"] = stats_payload(state)
    return jsonify(payload), 200

# -----------------------------------------------------------------------------
# API: Solve (stateless oracle for a display layer)
# -----------------------------------------------------------------------------
@bp.get("/api/solve")
def api_solve():
    values = coerce_number_list(request.args.get("values"))
    if not values:
        return _bad("Missing or invalid values")
    return jsonify({"ok": True, "values": values, **solve(values).to_dict()}), 200

# -----------------------------------------------------------------------------
# API: Skip / Restart / Score
# -----------------------------------------------------------------------------
@bp.post("/api/skip")
def api_skip():
    state = _state()
    ensure_played_once(state)
    bump_skipped(state)
    state["current_hand"] = None
    state["current_started_at"] = None
    return jsonify({"ok": True, "stats": stats_payload(state)}), 200

@bp.post("/api/restart")
def api_restart():
    state = reset_state(_sid())
    return jsonify({"ok": True, "stats": stats_payload(state)}), 200

@bp.get("/api/score")
def api_score():
    state = _state()
    return jsonify({
        "ok": True,
        "daily_score": get_daily_score(_player_key()),
        "elapsed": elapsed_seconds(state),
        "stats": stats_payload(state),
    }), 200
