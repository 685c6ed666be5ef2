"""Plain-text routes outside the JSON API."""

from flask import Blueprint

views_bp = Blueprint("views", __name__)


@views_bp.route("/")
def index():
    return "Backend API is running! Visit /api to get the time from the database.", 200, {
        "Content-Type": "text/plain; charset=utf-8"
    }
