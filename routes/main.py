from flask import Blueprint, render_template

from utils.responses import plain

main_bp = Blueprint("main", __name__)


@main_bp.get("/")
def landing():
    return render_template("landing.html")


@main_bp.get("/health")
def health():
    return plain("ok", 200)
