"""
Logging setup shared by the solver and the CLI.

All modules log through children of the "meeting_csp" logger, so one
call to get_logger() configures output for the whole package.
"""

from __future__ import annotations

import logging
from typing import Optional

LOGGER_NAME = "meeting_csp"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Return the package logger, or a child of it when name is given.

    A StreamHandler at INFO is attached to the package logger the first
    time this is called, unless the application already added handlers.
    """
    root = logging.getLogger(LOGGER_NAME)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(
            "%(asctime)s [%(levelname)s] [%(name)s] %(message)s"
        ))
        root.addHandler(handler)
        root.setLevel(logging.INFO)

    if name is None or name == LOGGER_NAME:
        return root
    if name.startswith(LOGGER_NAME + "."):
        name = name[len(LOGGER_NAME) + 1:]
    return root.getChild(name)


def set_verbose(verbose: bool) -> None:
    get_logger().setLevel(logging.DEBUG if verbose else logging.INFO)
