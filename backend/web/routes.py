from flask import Flask

from backend.database.storage import TaskStore


def register_blueprints(app: Flask, store: TaskStore) -> None:
    from backend.api import create_api_blueprint
    from backend.web.views import views_bp

    app.register_blueprint(views_bp)
    app.register_blueprint(create_api_blueprint(store), url_prefix="/api")


def register_cors(app: Flask) -> None:
    """Attach the CORS headers to every response."""

    @app.after_request
    def add_cors_headers(response):
        response.headers["Access-Control-Allow-Origin"] = app.config["CORS_ALLOW_ORIGIN"]
        response.headers["Access-Control-Allow-Methods"] = app.config["CORS_ALLOW_METHODS"]
        response.headers["Access-Control-Allow-Headers"] = app.config["CORS_ALLOW_HEADERS"]
        return response
