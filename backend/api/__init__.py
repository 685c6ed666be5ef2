import logging

from flask import Blueprint, jsonify

from backend.core.errors import TaskServiceError
from backend.database.storage import TaskStore

from .clock import create_clock_blueprint
from .tasks import create_tasks_blueprint

logger = logging.getLogger(__name__)


def create_api_blueprint(store: TaskStore) -> Blueprint:
    """Build the ``/api`` blueprint with every route bound to *store*."""
    api_bp = Blueprint("api", __name__)

    @api_bp.errorhandler(TaskServiceError)
    def handle_service_error(exc: TaskServiceError):
        if exc.status_code >= 500:
            logger.error(f"Request failed: {exc.message}")
        return jsonify({"error": exc.message}), exc.status_code

    api_bp.register_blueprint(create_clock_blueprint(store))
    api_bp.register_blueprint(create_tasks_blueprint(store))
    return api_bp
