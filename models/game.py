from datetime import datetime
from models.db import db


class Game(db.Model):
    __tablename__ = "games"

    id = db.Column(db.Integer, primary_key=True)

    title = db.Column(db.String(160), nullable=False)
    description = db.Column(db.Text, nullable=True)
    date = db.Column(db.Date, nullable=False, index=True)
    player_limit = db.Column(db.Integer, nullable=False)

    created_by = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    creator = db.relationship("User", back_populates="games")
    enrollments = db.relationship(
        "Enrollment",
        back_populates="game",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        db.CheckConstraint("player_limit > 0", name="ck_games_player_limit_positive"),
    )
