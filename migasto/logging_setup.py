import logging
import sys

from typing import IO


PACKAGE_LOGGER = 'migasto'
LOG_FORMAT = '%(asctime)s %(name)s %(levelname)s %(message)s'
_configured = False


def _level_number(level: int | str | None) -> int:
    if isinstance(level, int):
        return level
    if isinstance(level, str) and isinstance(getattr(logging, level.strip().upper(), None), int):
        return getattr(logging, level.strip().upper())
    return logging.INFO


def configure_logging(level: int | str | None = None, stream: IO[str] = sys.stderr) -> None:
    """
    Send the logs of the app to the given stream. only the first call has an effect, streamlit reruns main.py on
    every interaction.

    Parameters
    ----------
    level : int | str | None
        the logging level, a number or a name such as "DEBUG". defaults to INFO
    stream : IO[str]
        where to write the logs
    """
    global _configured
    if _configured:
        return

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.handlers = [h for h in logger.handlers if not isinstance(h, logging.NullHandler)]
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(_level_number(level))
    logger.propagate = False
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """get a logger of the app, silent until configure_logging is called"""
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if not _configured and not package_logger.handlers:
        package_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)
