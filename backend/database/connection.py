"""
Database connection management.

Normalizes the configured connection string, creates the single-connection
engine shared by every request and runs the startup retry loop.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Callable, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.pool import StaticPool

from backend.core.errors import StartupFailure
from backend.core.telemetry import get_meter, get_tracer, instrument_engine

logger = logging.getLogger(__name__)

tracer = get_tracer()
meter = get_meter()
connect_attempt_counter = meter.create_counter(
    "tasks.store.connect.attempts",
    description="Number of startup connection attempts",
)
connect_failure_counter = meter.create_counter(
    "tasks.store.connect.failures",
    description="Number of failed startup connection attempts",
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def normalize_url(url: str) -> str:
    """
    Strip quotes/whitespace and pin PostgreSQL URLs without a driver to
    psycopg2 (``postgres://`` and ``postgresql://`` become
    ``postgresql+psycopg2://``).
    """
    url = (url or "").strip()
    if len(url) >= 2 and url[0] == url[-1] and url[0] in ("'", '"'):
        url = url[1:-1].strip()
    for scheme in ("postgres://", "postgresql://"):
        if url.startswith(scheme):
            url = url.replace(scheme, "postgresql+psycopg2://", 1)
            break
    return url


def mask_url(url: str) -> str:
    """Hide the password part of a connection URL for logging."""
    try:
        return make_url(url).render_as_string(hide_password=True)
    except Exception:
        return "<unparseable database url>"


def create_store_engine(url: str) -> Engine:
    """
    Create the engine backing the task store.

    The pool holds exactly one connection: concurrent requests queue on
    checkout instead of opening more connections.
    """
    url = normalize_url(url)
    kwargs: dict = {"echo": False}

    parsed = make_url(url)
    if parsed.get_backend_name() == "sqlite":
        kwargs["connect_args"] = {"check_same_thread": False}
        if parsed.database and parsed.database != ":memory:":
            Path(parsed.database).parent.mkdir(parents=True, exist_ok=True)
            kwargs.update(pool_size=1, max_overflow=0)
        else:
            # An in-memory database only lives as long as its one connection.
            kwargs["poolclass"] = StaticPool
    else:
        kwargs.update(pool_size=1, max_overflow=0, pool_pre_ping=True)

    engine = create_engine(url, **kwargs)

    instrument_engine(engine)

    return engine


def probe_connection(engine: Engine) -> str:
    """Open a connection, run a trivial query and return the database name."""
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
    return engine.url.database or engine.url.get_backend_name()


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def connect_with_retry(
    url: str,
    max_attempts: int = 10,
    delay: float = 5.0,
    *,
    sleep: Callable[[float], None] = time.sleep,
    engine_factory: Callable[[str], Engine] = create_store_engine,
    prepare: Optional[Callable[[Engine], None]] = None,
) -> Engine:
    """
    Connect to the store, retrying with a fixed delay.

    Makes at most *max_attempts* attempts and sleeps *delay* seconds between
    two consecutive attempts.  Raises :class:`StartupFailure` once every
    attempt has failed.  *prepare*, if given, runs against the fresh engine
    as part of each attempt.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    logger.info("DATABASE_URL: %s", mask_url(normalize_url(url)))
    last_error: Optional[BaseException] = None

    for attempt in range(1, max_attempts + 1):
        logger.info("Connecting to the database (attempt %d/%d)...", attempt, max_attempts)
        connect_attempt_counter.add(1)
        engine: Optional[Engine] = None
        try:
            with tracer.start_as_current_span("tasks.store.connect", attributes={"attempt": attempt}):
                engine = engine_factory(url)
                db_name = probe_connection(engine)
                if prepare is not None:
                    prepare(engine)
        except Exception as exc:
            last_error = exc
            connect_failure_counter.add(1)
            logger.error("Database connection failed: %s", exc)
            if engine is not None:
                engine.dispose()
            if attempt < max_attempts:
                logger.info("Retrying in %s seconds...", delay)
                sleep(delay)
            continue

        logger.info("Connected to database: %s", db_name)
        return engine

    logger.error("Reached the maximum number of attempts. Could not connect to the database.")
    raise StartupFailure(max_attempts, last_error)
