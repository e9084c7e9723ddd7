"""Logging setup for the contract API.

Every noisy subsystem gets its own level setting so that, for example,
SQL echo or the document pipeline can be turned up to DEBUG while the
rest of the service stays at INFO.

Usage:
    from app.infrastructure.logging.log_config import setup_logging
    setup_logging()   # once, from the FastAPI lifespan
"""

import logging
import sys

from app.config import Settings, get_settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s — %(message)s"


# ── Settings field → logger names ───────────────────────────────────

_LOGGER_GROUPS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("log_level_sql", ("sqlalchemy.engine", "sqlalchemy.pool", "aiosqlite")),
    ("log_level_http", ("httpx", "httpcore")),
    ("log_level_uvicorn", ("uvicorn", "uvicorn.access", "uvicorn.error")),
    (
        "log_level_pipeline",
        (
            "ContractDocumentPipeline",
            "app.infrastructure.rendering",
            "app.infrastructure.storage",
        ),
    ),
)


def setup_logging(settings: Settings | None = None) -> dict[str, int]:
    """Apply root and per-group log levels.

    Returns the numeric level assigned to each configured logger name,
    keyed by logger name (the root logger is keyed as ``"root"``).
    """
    settings = settings or get_settings()
    applied: dict[str, int] = {}

    root = logging.getLogger()
    root.setLevel(_parse_level(settings.log_level, "log_level"))
    applied["root"] = root.level

    # uvicorn installs its own handler; pytest and `python -m` runs do not
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)

    for field, logger_names in _LOGGER_GROUPS:
        level = _parse_level(getattr(settings, field), field)
        for name in logger_names:
            logging.getLogger(name).setLevel(level)
            applied[name] = level

    logging.getLogger(__name__).debug(
        "Log levels: root=%s sql=%s http=%s uvicorn=%s pipeline=%s",
        settings.log_level,
        settings.log_level_sql,
        settings.log_level_http,
        settings.log_level_uvicorn,
        settings.log_level_pipeline,
    )
    return applied


def _parse_level(raw: str, field: str) -> int:
    numeric = logging.getLevelName(raw.strip().upper())
    if isinstance(numeric, int):
        return numeric
    logging.getLogger(__name__).warning("Unknown %s %r, using INFO", field, raw)
    return logging.INFO
