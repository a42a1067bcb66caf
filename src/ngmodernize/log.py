"""Logging setup: one ``ngmodernize`` logger tree, rendered by Rich.

Components never reach for a global logger. They receive a
:class:`ComponentLogger` (usually from :func:`get_logger`) and every record
it emits carries two extra attributes:

* ``component``: the pipeline stage that produced it (``detector``,
  ``transformer``, ``coordinator`` ...).
* ``payload``: an optional dict of structured context (path, rule id,
  counts) for handlers that want more than the formatted message.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, MutableMapping, Optional, Tuple

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "ngmodernize"

_initialized = False


class ComponentLogger(logging.LoggerAdapter):
    """Logger adapter that stamps ``component`` and ``payload`` on records."""

    def __init__(self, logger: logging.Logger, component: str) -> None:
        super().__init__(logger, {"component": component})
        self.component = component

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> Tuple[Any, MutableMapping[str, Any]]:
        payload = kwargs.pop("payload", None)
        extra = dict(kwargs.get("extra") or {})
        extra.setdefault("component", self.component)
        extra["payload"] = payload or {}
        kwargs["extra"] = extra
        return msg, kwargs

    def child(self, component: str) -> "ComponentLogger":
        """Logger for a sub-component, nested under this adapter's logger."""
        return ComponentLogger(self.logger.getChild(component), component)


class _ComponentFilter(logging.Filter):
    """Make sure records from plain loggers still format cleanly."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "component"):
            record.component = record.name.rsplit(".", 1)[-1]
        if not hasattr(record, "payload"):
            record.payload = {}
        return True


def setup_logging(verbose: bool = False, console: Optional[Console] = None) -> None:
    """Attach a Rich handler to the ``ngmodernize`` logger (idempotent)."""
    global _initialized

    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(logging.DEBUG if verbose else logging.INFO)
    if _initialized:
        for handler in root.handlers:
            handler.setLevel(root.level)
        return

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        show_time=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("[%(component)s] %(message)s"))
    handler.addFilter(_ComponentFilter())
    handler.setLevel(root.level)
    root.addHandler(handler)
    _initialized = True


def get_logger(component: str) -> ComponentLogger:
    """Return a component-scoped logger under the ``ngmodernize`` tree."""
    return ComponentLogger(logging.getLogger(f"{ROOT_LOGGER}.{component}"), component)


def payload_of(record: logging.LogRecord) -> Dict[str, Any]:
    """Structured payload attached to *record* (empty dict if none)."""
    return getattr(record, "payload", {}) or {}
