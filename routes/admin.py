from flask import Blueprint, g, redirect, render_template, url_for

from models import db
from security.rbac import require_role
from services.games import (
    create_game,
    delete_game,
    get_owned_game,
    list_games_for_admin,
    parse_game_form,
    update_game,
)
from utils.events import log_event
from utils.responses import form_data
from utils.roles import ROLE_ADMIN

admin_bp = Blueprint("admin", __name__)


@admin_bp.get("/admin/dashboard")
@require_role(ROLE_ADMIN)
def dashboard():
    rows = list_games_for_admin(db.session, g.session.user_id)
    return render_template("admin_dashboard.html", rows=rows)


@admin_bp.get("/games/create")
@require_role(ROLE_ADMIN)
def create_form():
    return render_template("game_form.html", game=None)


@admin_bp.post("/games/create")
@require_role(ROLE_ADMIN)
def create():
    fields = parse_game_form(form_data())
    game = create_game(db.session, g.session.user_id, fields)

    log_event("GAME_CREATE", user_id=g.session.user_id, entity="game", entity_id=game.id)
    return redirect(url_for("admin.dashboard"))


@admin_bp.get("/games/<int:game_id>/edit")
@require_role(ROLE_ADMIN)
def edit_form(game_id: int):
    game = get_owned_game(db.session, game_id, g.session.user_id)
    return render_template("game_form.html", game=game)


@admin_bp.post("/games/<int:game_id>/edit")
@require_role(ROLE_ADMIN)
def edit(game_id: int):
    fields = parse_game_form(form_data())
    update_game(db.session, game_id, g.session.user_id, fields)

    log_event("GAME_UPDATE", user_id=g.session.user_id, entity="game", entity_id=game_id)
    return redirect(url_for("admin.dashboard"))


@admin_bp.post("/games/<int:game_id>/delete")
@require_role(ROLE_ADMIN)
def delete(game_id: int):
    delete_game(db.session, game_id, g.session.user_id)

    log_event("GAME_DELETE", user_id=g.session.user_id, entity="game", entity_id=game_id)
    return redirect(url_for("admin.dashboard"))
