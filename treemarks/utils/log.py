"""Logging setup for Treemarks.

Output is scoped to the ``treemarks`` logger so that libraries logging
through the root logger are left alone. Loggers named in
``LogConfig.quiet`` are raised to WARNING.
"""

import logging
import os
import sys
from dataclasses import dataclass
from typing import Any, Dict, Tuple

from rich.logging import RichHandler

APP_LOGGER = "treemarks"

# PyQt6 logs .ui loading at DEBUG through these
DEFAULT_QUIET = ("PyQt6.uic",)


@dataclass(frozen=True)
class LogConfig:
    level: str = "INFO"
    no_color: bool = False
    quiet: Tuple[str, ...] = DEFAULT_QUIET

    @classmethod
    def from_section(cls, section: Dict[str, Any]) -> "LogConfig":
        """Build from the ``[logging]`` table of the config file."""
        quiet = section.get("quiet", DEFAULT_QUIET)
        if isinstance(quiet, str):
            quiet = (quiet,)
        return cls(
            level=str(section.get("level", cls.level)),
            no_color=bool(section.get("no_color", cls.no_color)),
            quiet=tuple(str(name) for name in quiet),
        )

    @property
    def levelno(self) -> int:
        level = logging.getLevelName(self.level.upper())
        return level if isinstance(level, int) else logging.INFO


def setup_logging(cfg: LogConfig) -> logging.Logger:
    """Attach one handler to the application logger, colourful on a TTY."""
    logger = logging.getLogger(APP_LOGGER)
    logger.setLevel(cfg.levelno)
    logger.propagate = False

    for h in list(logger.handlers):
        logger.removeHandler(h)

    force_no_color = cfg.no_color or os.getenv("NO_COLOR") is not None

    if not force_no_color and sys.stderr.isatty():
        handler = RichHandler(rich_tracebacks=True, show_time=False, show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)

    for name in cfg.quiet:
        logging.getLogger(name).setLevel(logging.WARNING)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Logger under the application namespace, e.g. ``treemarks.main``."""
    if name != APP_LOGGER and not name.startswith(APP_LOGGER + "."):
        name = f"{APP_LOGGER}.{name}"
    return logging.getLogger(name)
