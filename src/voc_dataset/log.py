"""Logging helpers shared by the library and the CLI."""

import logging
from logging import Logger

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "voc_dataset"


def get_logger(name: str) -> Logger:
    """Return a module logger under the ``voc_dataset`` namespace.

    The library never installs handlers; output is configured by
    :func:`setup_logging` (the CLI) or by the embedding application.
    """
    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


def setup_logging(verbose: bool = False, console: Console | None = None) -> Logger:
    """Send ``voc_dataset`` logs to a rich handler.

    Args:
        verbose: Log INFO messages (one per annotation file) instead of
            WARNING and above.
        console: Console to write to. Defaults to stderr.

    Returns:
        The configured package logger.
    """
    level = logging.INFO if verbose else logging.WARNING
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)

    # Avoid stacking handlers when invoked repeatedly (tests, notebooks)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        markup=False,
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)

    return logger
