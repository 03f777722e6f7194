"""Applying a Config to whatever draws the canvas."""

from __future__ import annotations

import logging
import os
from typing import Callable, Dict, Optional

from .config_scanner import Config

logger = logging.getLogger(__name__)


def get_system_schema(environ: Optional[Dict[str, str]] = None) -> str:
    """Guess whether the terminal background is dark or light.

    Reads ``COLORFGBG`` ("fg;bg", set by rxvt, konsole, iTerm2 and others).
    Background colours 0-6 and 8 are dark. Unknown means light.
    """
    env = os.environ if environ is None else environ
    value = env.get("COLORFGBG", "")
    background = value.split(";")[-1] if value else ""
    try:
        code = int(background)
    except ValueError:
        return "light"
    return "dark" if code in (0, 1, 2, 3, 4, 5, 6, 8) else "light"


def format_size(size: float) -> str:
    """Render a size like ``14px`` or ``12.5px``."""
    return f"{size:g}px"


class Display:
    """Holds the theme class and display variables derived from a Config.

    ``refresh`` is called after every apply so the host can repaint.
    """

    def __init__(self, refresh: Optional[Callable[[], None]] = None,
                 system_schema: Callable[[], str] = get_system_schema):
        self._refresh = refresh
        self._system_schema = system_schema
        self.theme_class = "light"
        self.variables: Dict[str, str] = {}

    def apply(self, config: Config) -> None:
        """Set theme class and variables from config, then refresh."""
        if config.schema in ("dark", "light"):
            self.theme_class = config.schema
        else:
            self.theme_class = self._system_schema()
        self.variables = {
            "--config-font": f"'{config.font}'",
            "--config-size": format_size(config.size),
        }
        logger.debug("Display theme=%s variables=%s", self.theme_class, self.variables)
        if self._refresh is not None:
            self._refresh()
