"""Application configuration."""

import os
from pathlib import Path

# Base directory of the project
BASE_DIR = Path(__file__).resolve().parent.parent.parent


class Config:
    # Connection string for the task store.  ``postgres://`` URLs are
    # accepted and normalized before the engine is created.
    DATABASE_URL = os.environ.get("DATABASE_URL", f"sqlite:///{BASE_DIR / 'data' / 'tasks.db'}")

    HOST = os.environ.get("HOST", "0.0.0.0")
    PORT = int(os.environ.get("PORT", 3001))

    # Startup connection retry: fixed delay (seconds) between attempts.
    DB_CONNECT_ATTEMPTS = int(os.environ.get("DB_CONNECT_ATTEMPTS", 10))
    DB_CONNECT_DELAY = float(os.environ.get("DB_CONNECT_DELAY", 5))

    CORS_ALLOW_ORIGIN = os.environ.get("CORS_ALLOW_ORIGIN", "*")
    CORS_ALLOW_METHODS = os.environ.get("CORS_ALLOW_METHODS", "GET, POST, OPTIONS")
    CORS_ALLOW_HEADERS = os.environ.get("CORS_ALLOW_HEADERS", "Content-Type")

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

    # OpenTelemetry: disabled unless an OTLP endpoint is set or OTEL_DEBUG
    # sends spans and metrics to the console.
    OTEL_SERVICE_NAME = os.environ.get("OTEL_SERVICE_NAME", "task-service")
    OTEL_EXPORTER_OTLP_ENDPOINT = os.environ.get("OTEL_EXPORTER_OTLP_ENDPOINT")
    OTEL_DEBUG = os.environ.get("OTEL_DEBUG", "false").lower() == "true"
