from __future__ import annotations
import logging

from rich.logging import RichHandler

FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATEFMT = "%H:%M:%S"


def configure_logging(level: int | str = logging.INFO, rich: bool = True) -> None:
    """
    Configure the root logger with a console handler.

    Handlers installed by a previous call are removed first, so calling this
    twice (e.g. from a notebook) does not duplicate output.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {level}")

    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)

    if rich:
        handler = RichHandler(rich_tracebacks=True, show_path=False)
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt=FORMAT, datefmt=DATEFMT))
    handler.setLevel(level)

    logging.basicConfig(level=level, format=FORMAT, datefmt=DATEFMT, handlers=[handler])


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
