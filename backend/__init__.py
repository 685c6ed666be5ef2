from __future__ import annotations

from typing import Any, Mapping, Optional

from flask import Flask

from backend.database.storage import TaskStore
from backend.services.lifecycle import ServiceLifecycle


def create_app(test_config: Optional[Mapping[str, Any]] = None, store: Optional[TaskStore] = None) -> Flask:
    """
    Application factory: creates the Flask app once the store is ready.

    Without *store* the factory connects to ``DATABASE_URL`` with retries and
    raises :class:`~backend.core.errors.StartupFailure` if that never
    succeeds; no route is registered in that case.  A *store* passed in is
    used as is (its schema must already exist).
    """
    app = Flask(__name__)
    app.config.from_object("backend.core.config.Config")
    if test_config:
        app.config.update(test_config)

    from backend.core.telemetry import init_telemetry
    from backend.web.routes import register_blueprints, register_cors

    init_telemetry(app)

    register_cors(app)

    lifecycle = ServiceLifecycle()
    lifecycle.on_ready(lambda ready_store: register_blueprints(app, ready_store))
    app.extensions["lifecycle"] = lifecycle

    if store is not None:
        lifecycle.attach(store)
    else:
        lifecycle.connect(
            app.config["DATABASE_URL"],
            max_attempts=app.config["DB_CONNECT_ATTEMPTS"],
            delay=app.config["DB_CONNECT_DELAY"],
        )

    return app
