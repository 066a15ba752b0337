from datetime import datetime
from models.db import db


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)

    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)

    # fixed at signup, there is no role-change operation
    role = db.Column(db.String(20), nullable=False)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    games = db.relationship("Game", back_populates="creator")

    __table_args__ = (
        db.CheckConstraint("role IN ('admin', 'player')", name="ck_users_role"),
    )
