"""
Runtime settings and logging setup.

Settings carries what the renderers and the engine need to know about the
running program: its name and version (shown in help footers and fault
headers), whether to colorize, whether to wrap reports in panels, and the log
level. Settings.from_environ() reads the optional environment variables:

- HELMSMAN_LOG_LEVEL: logging level name (default WARNING)
- NO_COLOR: any non-empty value disables color
- HELMSMAN_FANCY: "1"/"true"/"yes"/"on" wraps help and faults in panels

The host program can relabel itself through __prog__ in __main__; an explicit
prog argument wins over it.
"""
import logging
import os
import sys

from rich.console import Console
from rich.logging import RichHandler

from . import __version__
from .utils import Unset, coalesce

_TRUTHS = frozenset({"1", "true", "yes", "on"})


def _level(name):
    # Unknown names fall back to WARNING rather than aborting the launch.
    name = name.strip().upper()
    return name if name in logging.getLevelNamesMapping() else "WARNING"


class Settings:
    """
    Immutable launcher settings.
    """
    __slots__ = ("_prog", "_version", "_colorful", "_fancy", "_log_level")

    def __init__(self, prog=Unset, version=__version__, *, colorful=False, fancy=False, log_level=logging.WARNING):
        self._prog = str(coalesce(prog, getattr(__import__("__main__"), "__prog__", "helmsman")))
        self._version = str(version)
        self._colorful = bool(colorful)
        self._fancy = bool(fancy)
        self._log_level = logging.getLevelName(log_level) if isinstance(log_level, int) else str(log_level).upper()
        if self._log_level not in logging.getLevelNamesMapping():
            raise ValueError("unknown log level %r" % (log_level,))

    @classmethod
    def from_environ(cls, environ=None, /, **overrides):
        """
        Build settings from environment variables; keyword overrides win.
        """
        environ = os.environ if environ is None else environ
        options = {
            "colorful": not environ.get("NO_COLOR") and sys.stdout.isatty(),
            "fancy": environ.get("HELMSMAN_FANCY", "").strip().lower() in _TRUTHS,
            "log_level": _level(environ.get("HELMSMAN_LOG_LEVEL", "")),
        }
        return cls(**options | overrides)

    @property
    def prog(self):
        return self._prog

    @property
    def version(self):
        return self._version

    @property
    def colorful(self):
        return self._colorful

    @property
    def fancy(self):
        return self._fancy

    @property
    def log_level(self):
        return self._log_level

    def __repr__(self):
        return "settings(prog=%r, version=%r, colorful=%r, fancy=%r, log_level=%r)" % (
            self._prog, self._version, self._colorful, self._fancy, self._log_level
        )


def configure_logging(level="WARNING", /):
    """
    Route the 'helmsman' logger to stderr through Rich.

    Idempotent: calling it again only updates the level.
    """
    logger = logging.getLogger("helmsman")
    logger.setLevel(level)
    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        logger.addHandler(RichHandler(console=Console(stderr=True), show_path=False))
        logger.propagate = False
    return logger


__all__ = (
    "Settings",
    "configure_logging",
)
