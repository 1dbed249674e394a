# make24/models.py
from datetime import datetime, timezone

from .db import db


def _utcnow():
    return datetime.now(timezone.utc)


class DailyScore(db.Model):
    """Wins per player per calendar day (the 'Today's Wins' counter)."""
    __tablename__ = "daily_scores"

    id = db.Column(db.Integer, primary_key=True)
    player_key = db.Column(db.String(160), nullable=False, index=True)  # session cookie id
    day = db.Column(db.Date, nullable=False)
    count = db.Column(db.Integer, nullable=False, default=0)
    updated_at = db.Column(db.DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    __table_args__ = (
        db.UniqueConstraint("player_key", "day", name="uq_daily_scores_player_day"),
    )

    def __repr__(self):
        return f"<DailyScore {self.player_key} {self.day}={self.count}>"
