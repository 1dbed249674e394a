# make24/games/game24/daily_score.py
"""
'Today's Wins' counter, one row per (player, day).

A row from an earlier day simply isn't today's row, so the count starts
again from 0 every day. Storage failures never break play: reads fall back
to 0 and increments to the last known count.
"""
import logging
from datetime import date
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from make24.db import db
from make24.models import DailyScore

logger = logging.getLogger(__name__)


def _row(player_key: str, day: date) -> Optional[DailyScore]:
    return DailyScore.query.filter_by(player_key=player_key, day=day).first()


def get_daily_score(player_key: str, today: Optional[date] = None) -> int:
    today = today or date.today()
    try:
        row = _row(player_key, today)
    except SQLAlchemyError:
        logger.exception("Reading daily score failed for %s", player_key)
        db.session.rollback()
        return 0
    return int(row.count) if row else 0


def increment_daily_score(player_key: str, today: Optional[date] = None) -> int:
    today = today or date.today()
    current = 0
    try:
        row = _row(player_key, today)
        if row is None:
            row = DailyScore(player_key=player_key, day=today, count=0)
            db.session.add(row)
        current = int(row.count or 0)
        row.count = current + 1
        db.session.commit()
    except SQLAlchemyError:
        logger.exception("Saving daily score failed for %s", player_key)
        db.session.rollback()
        return current
    logger.info("Daily score for %s on %s -> %d", player_key, today.isoformat(), row.count)
    return int(row.count)
