from datetime import date

from flask import current_app
from sqlalchemy import func

from models.enrollment import Enrollment
from models.game import Game
from services.errors import Forbidden, NotFound, ValidationError


def _parse_date(value) -> date:
    # Expect ISO format like "2026-01-20"
    try:
        return date.fromisoformat((value or "").strip())
    except (TypeError, ValueError, AttributeError):
        raise ValidationError("Invalid date. Use YYYY-MM-DD")


def _parse_player_limit(value) -> int:
    try:
        limit = int(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError("player_limit must be a positive integer")

    max_limit = current_app.config.get("MAX_PLAYER_LIMIT", 1000)
    if limit < 1:
        raise ValidationError("player_limit must be a positive integer")
    if limit > max_limit:
        raise ValidationError(f"player_limit must be at most {max_limit}")
    return limit


def _text(form, name: str) -> str:
    value = form.get(name)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"{name} must be text")
    return value.strip()


def parse_game_form(form) -> dict:
    title = _text(form, "title")
    description = _text(form, "description") or None

    if not title:
        raise ValidationError("Title is required")
    if len(title) > 160:
        raise ValidationError("Title must be at most 160 characters")

    return {
        "title": title,
        "description": description,
        "date": _parse_date(form.get("date")),
        "player_limit": _parse_player_limit(form.get("player_limit")),
    }


def _enrolled_count():
    return func.count(Enrollment.id).label("enrolled_count")


def list_games_with_counts(db_session):
    """All games with their current enrollment count, soonest first."""
    return (
        db_session.query(Game, _enrolled_count())
        .outerjoin(Enrollment, Enrollment.game_id == Game.id)
        .group_by(Game.id)
        .order_by(Game.date.asc(), Game.id.asc())
        .all()
    )


def list_games_for_admin(db_session, admin_id: int):
    return (
        db_session.query(Game, _enrolled_count())
        .outerjoin(Enrollment, Enrollment.game_id == Game.id)
        .filter(Game.created_by == admin_id)
        .group_by(Game.id)
        .order_by(Game.date.asc(), Game.id.asc())
        .all()
    )


def enrolled_game_ids(db_session, player_id: int) -> set:
    rows = db_session.query(Enrollment.game_id).filter_by(player_id=player_id).all()
    return {r.game_id for r in rows}


def count_enrollments(db_session, game_id: int) -> int:
    return (
        db_session.query(func.count(Enrollment.id))
        .filter(Enrollment.game_id == game_id)
        .scalar()
    )


def create_game(db_session, admin_id: int, fields: dict) -> Game:
    game = Game(created_by=admin_id, **fields)
    db_session.add(game)
    db_session.commit()
    return game


def _check_owner(game, admin_id: int):
    if game is None:
        raise NotFound("Game not found")
    if game.created_by != admin_id:
        raise Forbidden("You can only manage games you created")


def get_owned_game(db_session, game_id: int, admin_id: int) -> Game:
    game = db_session.get(Game, game_id)
    _check_owner(game, admin_id)
    return game


def _lock_game(db_session, game_id: int):
    return (
        db_session.query(Game)
        .filter(Game.id == game_id)
        .with_for_update()
        .first()
    )


def update_game(db_session, game_id: int, admin_id: int, fields: dict) -> Game:
    """
    Ownership and the new capacity are checked under the row lock, in the
    same transaction as the write.
    """
    try:
        game = _lock_game(db_session, game_id)
        _check_owner(game, admin_id)

        enrolled = count_enrollments(db_session, game_id)
        if fields["player_limit"] < enrolled:
            raise ValidationError(
                f"player_limit cannot be below the {enrolled} players already enrolled"
            )

        for key, value in fields.items():
            setattr(game, key, value)
        db_session.commit()
    except Exception:
        db_session.rollback()
        raise
    return game


def delete_game(db_session, game_id: int, admin_id: int) -> None:
    try:
        game = _lock_game(db_session, game_id)
        _check_owner(game, admin_id)

        # enrollments go with it (relationship cascade)
        db_session.delete(game)
        db_session.commit()
    except Exception:
        db_session.rollback()
        raise
