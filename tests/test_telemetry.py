from flask import Flask

from backend.core.config import Config
from backend.core.telemetry import init_telemetry, telemetry_enabled


def test_disabled_without_endpoint_or_debug():
    assert not telemetry_enabled({"OTEL_EXPORTER_OTLP_ENDPOINT": None, "OTEL_DEBUG": False})
    assert telemetry_enabled({"OTEL_EXPORTER_OTLP_ENDPOINT": "http://collector:4317", "OTEL_DEBUG": False})
    assert telemetry_enabled({"OTEL_DEBUG": True})


def test_init_is_a_no_op_when_disabled():
    app = Flask(__name__)
    app.config.from_object(Config)
    app.config.update(OTEL_EXPORTER_OTLP_ENDPOINT=None, OTEL_DEBUG=False)
    assert init_telemetry(app) is False

