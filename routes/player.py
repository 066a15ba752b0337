from flask import Blueprint, g, redirect, render_template, url_for

from models import db
from security.rbac import require_role
from services.enrollment import enroll as admit_player
from services.errors import CapacityExceeded
from services.games import enrolled_game_ids, list_games_with_counts
from utils.events import log_event
from utils.roles import ROLE_PLAYER

player_bp = Blueprint("player", __name__)


@player_bp.get("/player/dashboard")
@require_role(ROLE_PLAYER)
def dashboard():
    rows = list_games_with_counts(db.session)
    enrolled = enrolled_game_ids(db.session, g.session.user_id)
    return render_template("player_dashboard.html", rows=rows, enrolled=enrolled)


@player_bp.post("/games/<int:game_id>/enroll")
@require_role(ROLE_PLAYER)
def enroll(game_id: int):
    player_id = g.session.user_id
    try:
        enrollment_id = admit_player(db.session, player_id, game_id)
    except CapacityExceeded:
        log_event("ENROLL_REJECTED_FULL", user_id=player_id, entity="game", entity_id=game_id)
        raise

    log_event(
        "ENROLL_SUCCESS",
        user_id=player_id,
        entity="enrollment",
        entity_id=enrollment_id,
        metadata={"game_id": game_id},
    )
    return redirect(url_for("player.dashboard"))
