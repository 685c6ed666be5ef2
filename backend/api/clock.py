from flask import Blueprint, jsonify

from backend.database.storage import TaskStore


def create_clock_blueprint(store: TaskStore) -> Blueprint:
    clock_bp = Blueprint("clock", __name__)

    @clock_bp.route("", methods=["GET"])
    def get_time():
        return jsonify({"time": store.get_time()})

    return clock_bp
