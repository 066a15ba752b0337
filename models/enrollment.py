from datetime import datetime
from models.db import db


class Enrollment(db.Model):
    __tablename__ = "enrollments"

    id = db.Column(db.Integer, primary_key=True)

    player_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    game_id = db.Column(
        db.Integer,
        db.ForeignKey("games.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    game = db.relationship("Game", back_populates="enrollments")

    __table_args__ = (
        # A player holds at most one seat per game
        db.UniqueConstraint("player_id", "game_id", name="uq_enrollment_player_game"),
    )
