"""Root logger setup driven by ``settings.logging``."""

from __future__ import annotations

import logging

from meterpay.core.config import Settings

_configured = False


def configure_logging(settings: Settings) -> None:
    global _configured
    level = logging.DEBUG if settings.debug else getattr(logging, settings.logging.level.upper(), logging.INFO)
    root = logging.getLogger()
    if not _configured:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(settings.logging.format))
        root.addHandler(handler)
        _configured = True
    root.setLevel(level)
    # SQL echo is controlled by ``database.echo``; keep the engine logger quiet otherwise.
    if not settings.database.echo:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


__all__ = ["configure_logging"]
