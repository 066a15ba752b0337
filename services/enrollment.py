from datetime import datetime

from sqlalchemy import DateTime, func, insert, literal, select
from sqlalchemy.exc import IntegrityError

from models.enrollment import Enrollment
from models.game import Game
from services.errors import CapacityExceeded, Conflict, NotFound

_enrollments = Enrollment.__table__
_games = Game.__table__


def _admission_insert(player_id: int, game_id: int):
    """
    INSERT ... SELECT that only produces a row while the game still has a
    free seat. The count and the write are one statement.
    """
    current = (
        select(func.count(_enrollments.c.id))
        .where(_enrollments.c.game_id == game_id)
        .scalar_subquery()
    )
    limit = (
        select(_games.c.player_limit)
        .where(_games.c.id == game_id)
        .scalar_subquery()
    )
    seat = select(
        literal(player_id).label("player_id"),
        literal(game_id).label("game_id"),
        literal(datetime.utcnow(), type_=DateTime).label("created_at"),
    ).where(current < limit)

    return insert(_enrollments).from_select(["player_id", "game_id", "created_at"], seat)


def enroll(db_session, player_id: int, game_id: int) -> int:
    """
    Admit player_id into game_id or raise.

    NotFound when the game does not exist, CapacityExceeded when it is full,
    Conflict when the player already holds a seat. Returns the enrollment id.
    """
    try:
        # Row lock serialises contenders on databases that support it
        game = (
            db_session.query(Game)
            .filter(Game.id == game_id)
            .with_for_update()
            .first()
        )
        if game is None:
            raise NotFound("Game not found")

        result = db_session.execute(_admission_insert(player_id, game_id))
        enrollment_id = (
            db_session.query(Enrollment.id)
            .filter_by(player_id=player_id, game_id=game_id)
            .scalar()
        )
        if result.rowcount != 1:
            # a full game the player already sits in is still a duplicate
            if enrollment_id is not None:
                raise Conflict("Already enrolled in this game")
            raise CapacityExceeded("Game is full")
        db_session.commit()
    except IntegrityError:
        db_session.rollback()
        # uq_enrollment_player_game
        raise Conflict("Already enrolled in this game")
    except Exception:
        db_session.rollback()
        raise

    return enrollment_id
