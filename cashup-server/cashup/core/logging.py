"""Process-wide logging setup."""

from __future__ import annotations

import logging
import sys

from cashup.core.config import Settings


def setup_logging(settings: Settings) -> None:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(settings.logging.format))
    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(settings.logging.level.upper())
