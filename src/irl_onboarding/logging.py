"""structlog setup shared by the CLI and embedding applications."""
from __future__ import annotations

import logging
import sys
from typing import Dict

import structlog

_DEFAULT_LEVEL = "info"

_LEVELS: Dict[str, int] = {
    "critical": logging.CRITICAL,
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


def configure_logging(level: str | None = None) -> None:
    """Route package events such as ``credential.issued`` to stderr as JSON lines.

    Each line carries ``ts``, ``level``, ``component`` (the emitting module)
    and ``msg`` (the dotted event name) plus the event's own fields. Secret
    keys and signatures are never passed as fields. stdout stays free for
    tokens, DIDs and profile JSON printed by the CLI.
    """

    numeric_level = _LEVELS.get((level or _DEFAULT_LEVEL).lower(), logging.INFO)

    logging.basicConfig(
        level=numeric_level,
        handlers=[logging.StreamHandler(sys.stderr)],
        format="%(message)s",
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso", key="ts"),
            structlog.stdlib.add_log_level,
            _add_component,
            _event_as_msg,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        cache_logger_on_first_use=True,
    )


def _add_component(
    logger: structlog.BoundLoggerBase, _name: str, event_dict: dict[str, object]
) -> dict[str, object]:
    # module name, e.g. irl_onboarding.credentials.issuance
    if event_dict.get("component") is None:
        event_dict["component"] = getattr(logger, "name", None) or "irl_onboarding"
    return event_dict


def _event_as_msg(
    _logger: structlog.BoundLoggerBase, _name: str, event_dict: dict[str, object]
) -> dict[str, object]:
    if "msg" not in event_dict:
        event_dict["msg"] = event_dict.pop("event", "")
    return event_dict


__all__ = ["configure_logging"]
