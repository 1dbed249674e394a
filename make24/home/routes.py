# make24/home/routes.py
from flask import Blueprint, jsonify, url_for

bp = Blueprint("home", __name__)


@bp.get("/")
def index():
    games = [
        {
            "key": "game24",
            "name": "Make 24",
            "difficulties": ["Easy", "Hard"],
            "endpoints": {
                "next": url_for("game24.api_next"),
                "check": url_for("game24.api_check"),
                "help": url_for("game24.api_help"),
                "solve": url_for("game24.api_solve"),
                "skip": url_for("game24.api_skip"),
                "restart": url_for("game24.api_restart"),
                "score": url_for("game24.api_score"),
            },
        },
    ]
    return jsonify({"ok": True, "games": games})
