"""Logging setup for xsdgen.

All modules obtain loggers through ``get_logger`` so that every record is
routed through the ``xsdgen`` namespace; ``configure_logging`` attaches a
rich handler to that namespace once.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "xsdgen"

_configured = False


def get_logger(name: str) -> logging.Logger:
    """Return a logger below the ``xsdgen`` namespace.

    Args:
        name: Usually ``__name__`` of the calling module.
    """
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def configure_logging(level: int | str = logging.WARNING) -> logging.Logger:
    """Install a ``RichHandler`` on the package logger.

    Repeated calls only adjust the level.

    Args:
        level: Logging level as int or name (``"DEBUG"``, ``"INFO"``...).

    Returns:
        The package root logger.
    """
    global _configured

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    if not _configured:
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
        _configured = True

    return logger
