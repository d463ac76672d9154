"""metascan — Logging set-up.

Modules log through ``logging.getLogger(__name__)``; this module only decides how
the root logger renders records: plain text, or one JSON object per line rendered
by structlog's ProcessorFormatter.
"""

from __future__ import annotations

import logging
from typing import Any

import structlog

PLAIN_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

# Applied to records coming from stdlib loggers before rendering.
SHARED_PROCESSORS: list[Any] = [
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso", utc=True, key="timestamp"),
]


def json_formatter() -> structlog.stdlib.ProcessorFormatter:
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=SHARED_PROCESSORS,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ],
    )


def configure_logging(level: str = "INFO", json_output: bool = False) -> None:
    """Install a single handler on the root logger."""
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(json_formatter() if json_output else logging.Formatter(PLAIN_FORMAT))
    root.addHandler(handler)
    root.setLevel(level.upper())
