# make24/__init__.py
from __future__ import annotations

import logging
import random
from typing import Any, Mapping, Optional

import click
from flask import Flask, jsonify
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from .db import db

# --- extensions ---
# storage comes from RATELIMIT_STORAGE_URI at init_app time
limiter = Limiter(get_remote_address)


def create_app(config_object: Any = None, test_config: Optional[Mapping[str, Any]] = None) -> Flask:
    app = Flask(__name__, instance_relative_config=True)

    # ---------------------------
    # Config
    # ---------------------------
    from .config import Config
    app.config.from_object(config_object or Config)
    app.config.from_pyfile("config.py", silent=True)  # instance/config.py (optional)
    if test_config:
        app.config.update(test_config)

    # ---------------------------
    # Logging
    # ---------------------------
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)
    app.logger.setLevel(level)
    logging.getLogger("make24").setLevel(level)

    # ---------------------------
    # Extensions init
    # ---------------------------
    db.init_app(app)
    limiter.init_app(app)

    @app.errorhandler(429)
    def _rate_limited(e):
        return jsonify({"ok": False, "reason": f"Too many requests: {e.description}"}), 429

    # ---------------------------
    # Blueprints
    # ---------------------------
    from .home.routes import bp as home_bp
    app.register_blueprint(home_bp)

    from .games.game24.game24_routes import bp as game24_bp
    # routes file sets url_prefix="/games/game24" on the blueprint
    app.register_blueprint(game24_bp)

    # ---------------------------
    # Tables
    # ---------------------------
    from . import models  # noqa: F401  register models on db.metadata
    if app.config.get("AUTO_CREATE_TABLES", True):
        with app.app_context():
            db.create_all()

    # ---------------------------
    # CLI commands
    # ---------------------------
    @app.cli.command("make24-init-db")
    def init_db():
        """Create the daily score tables."""
        with app.app_context():
            db.create_all()
        click.echo("✅ Tables created.")

    @app.cli.command("make24-solve")
    @click.argument("numbers", nargs=-1, type=float, required=True)
    def solve_cmd(numbers):
        """Solve a hand, e.g. `flask make24-solve 4 1 8 7`."""
        from .games.game24.logic.solver import format_number, solve
        result = solve(numbers)
        shown = " ".join(format_number(n) for n in numbers)
        if not result.solvable:
            click.echo(f"{shown}: no solution")
            return
        click.echo(f"{shown}: {result.solution} = 24")
        click.echo(f"First step: {result.first_step_hint}")

    @app.cli.command("make24-deal")
    @click.option("--difficulty", "-d", default="Easy", show_default=True, help="Easy (1-10) or Hard (1-13)")
    @click.option("--count", "-n", default=4, show_default=True, type=int)
    @click.option("--seed", type=int, default=None, help="Seed for a reproducible deal")
    def deal_cmd(difficulty, count, seed):
        """Deal a solvable hand."""
        from .games.game24.logic.dealer import Difficulty, draw_cards
        try:
            level = Difficulty.parse(difficulty)
            cards = draw_cards(count, level, rng=random.Random(seed) if seed is not None else None)
        except ValueError as e:
            raise click.BadParameter(str(e))
        click.echo(" ".join(f"{c.value}{c.suit.symbol}" for c in cards))

    return app
