import logging
import sys

from backend import create_app
from backend.core.config import Config
from backend.core.errors import StartupFailure

logging.basicConfig(level=Config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

try:
    app = create_app()
except StartupFailure as exc:
    logging.getLogger("wsgi").critical("Database unreachable, refusing to start: %s", exc)
    sys.exit(1)

if __name__ == "__main__":
    # This file is intended to be run by Gunicorn:
    # gunicorn -w 1 wsgi:app
    app.run(host=Config.HOST, port=Config.PORT)
