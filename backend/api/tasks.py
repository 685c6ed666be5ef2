from flask import Blueprint, jsonify, request

from backend.core.audit import log_task_event
from backend.core.errors import TaskServiceError
from backend.core.telemetry import record_task_operation
from backend.database.storage import TaskStore

from .utils import _parse_title


def create_tasks_blueprint(store: TaskStore) -> Blueprint:
    tasks_bp = Blueprint("tasks", __name__)

    def _failed(action: str, task_id, exc: TaskServiceError) -> None:
        log_task_event(action=action, task_id=task_id, details={"error": exc.message}, status="failure")
        record_task_operation(action, status="failure")

    @tasks_bp.route("/tasks", methods=["GET"])
    def list_tasks():
        return jsonify(store.list_tasks())

    @tasks_bp.route("/tasks", methods=["POST"])
    def create_task():
        try:
            task = store.create_task(_parse_title(request.get_json(silent=True)))
        except TaskServiceError as exc:
            _failed("create_task", None, exc)
            raise
        log_task_event(action="create_task", task_id=task["id"], details={"title": task["title"]})
        record_task_operation("create_task")
        return jsonify(task), 201

    @tasks_bp.route("/tasks/<int:task_id>/toggle", methods=["PATCH"])
    def toggle_task(task_id: int):
        try:
            task = store.toggle_task(task_id)
        except TaskServiceError as exc:
            _failed("toggle_task", task_id, exc)
            raise
        log_task_event(action="toggle_task", task_id=task_id, details={"is_done": task["is_done"]})
        record_task_operation("toggle_task")
        return jsonify(task)

    @tasks_bp.route("/tasks/<int:task_id>", methods=["DELETE"])
    def delete_task(task_id: int):
        try:
            store.delete_task(task_id)
        except TaskServiceError as exc:
            _failed("delete_task", task_id, exc)
            raise
        log_task_event(action="delete_task", task_id=task_id)
        record_task_operation("delete_task")
        return "", 204

    return tasks_bp
