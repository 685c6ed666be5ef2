"""
Task service entry point.

All application logic lives inside the ``backend`` package.
Run with:  uv run python main.py
"""

import logging
import sys

from backend import create_app
from backend.core.config import Config
from backend.core.errors import StartupFailure

logger = logging.getLogger("main")


def main() -> int:
    logging.basicConfig(
        level=Config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        app = create_app()
    except StartupFailure as exc:
        logger.critical("Could not start the application because of a database error: %s", exc)
        return 1

    logger.info("Backend running on port %s", Config.PORT)
    app.run(host=Config.HOST, port=Config.PORT)
    return 0


if __name__ == "__main__":
    sys.exit(main())
