"""
Logging — structlog setup with a stdlib bridge.

    configure_logging(settings)       # once, at session start
    log = get_logger("cart")
    log.info("cart.item_added", product_id="1", quantity=2)

Without configure_logging() structlog falls back to its own defaults,
which is what tests run with.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from storefront.config import StorefrontSettings

_CONFIGURED = False


def configure_logging(settings: StorefrontSettings) -> None:
    """
    One-shot structlog + stdlib configuration.

    Safe to call multiple times; only the first call takes effect.
    """
    global _CONFIGURED
    if _CONFIGURED:
        return
    _CONFIGURED = True

    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    renderer: Any = (
        structlog.processors.JSONRenderer()
        if settings.log_format == "json"
        else structlog.dev.ConsoleRenderer()
    )
    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]

    structlog.configure(
        processors=[*shared_processors, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Route logging.getLogger() output through the same pipeline
    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
        foreign_pre_chain=shared_processors,
    )
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)


def get_logger(component: str) -> Any:
    """Return a structlog logger bound with the owning component."""
    return structlog.get_logger().bind(component=component)


__all__ = ("configure_logging", "get_logger")
