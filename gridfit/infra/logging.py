"""Log formatting and opt-in handler setup for the ``gridfit`` logger tree."""

from __future__ import annotations

import json
import logging
import os
from datetime import UTC, datetime
from typing import TextIO

__all__ = ["GRID_FIELDS", "JsonFormatter", "grid_fields", "setup_logging"]

PACKAGE_LOGGER = "gridfit"
GRID_FIELDS = ("grid_width", "grid_height")
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))) | {"message"}


def grid_fields(width: int, height: int) -> dict[str, int]:
    """Return the ``extra`` mapping that tags a record with grid size."""
    return {"grid_width": width, "grid_height": height}


class JsonFormatter(logging.Formatter):
    """One JSON object per record; grid size is lifted into a ``grid`` key."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        extras = {k: v for k, v in vars(record).items() if k not in _RECORD_ATTRS}
        if all(name in extras for name in GRID_FIELDS):
            payload["grid"] = f"{extras.pop('grid_width')}x{extras.pop('grid_height')}"
        if extras:
            payload["fields"] = extras
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


def setup_logging(
    level_name: str | None = None,
    log_format: str | None = None,
    stream: TextIO | None = None,
) -> logging.Handler:
    """Attach one handler to the ``gridfit`` logger, replacing a previous one.

    Level and format default to ``GRIDFIT_LOG_LEVEL`` and ``GRIDFIT_LOG_FORMAT``
    (``text`` or ``json``). The root logger is left untouched.
    """
    level_name = (level_name or os.getenv("GRIDFIT_LOG_LEVEL", "WARNING")).strip().upper()
    log_format = (log_format or os.getenv("GRIDFIT_LOG_FORMAT", "text")).strip().lower()

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        if getattr(handler, "_gridfit_owned", False):
            package_logger.removeHandler(handler)
            handler.close()

    handler = logging.StreamHandler(stream)
    handler._gridfit_owned = True  # type: ignore[attr-defined]
    if log_format == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(getattr(logging, level_name, logging.WARNING))
    return handler
