"""Runtime logging helpers."""

from __future__ import annotations

import os
import sys
from logging import Handler
from typing import Literal

from loguru import logger
from rich import get_console
from rich.logging import RichHandler

LogProfile = Literal["default", "console"]

_PROFILE_FORMATS: dict[LogProfile, str] = {
    "console": "{message}",
    "default": "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<6} | {name}:{function}:{line} | {message}",
}
_CONFIGURED: tuple[LogProfile, str] | None = None


def _build_console_handler() -> Handler:
    return RichHandler(
        console=get_console(),
        show_level=True,
        show_time=False,
        show_path=False,
        markup=False,
        rich_tracebacks=False,
    )


def configure_logging(*, profile: LogProfile = "default", level: str | None = None) -> None:
    """Configure process-level logging once per profile and level."""
    global _CONFIGURED

    resolved_level = (level or os.getenv("DEVCONSOLE_LOG_LEVEL", "WARNING")).upper()
    if _CONFIGURED == (profile, resolved_level):
        return

    logger.remove()
    if profile == "console":
        logger.add(
            _build_console_handler(),
            level=resolved_level,
            format=_PROFILE_FORMATS[profile],
            backtrace=False,
            diagnose=False,
        )
    else:
        logger.add(
            sys.stderr,
            level=resolved_level,
            format=_PROFILE_FORMATS[profile],
            backtrace=False,
            diagnose=False,
        )
    _CONFIGURED = (profile, resolved_level)
