"""
Console logging for applications that embed urlkit.

Every module logs under the "urlkit" logger (e.g., "urlkit.strings.url"), which
is left unconfigured until the application asks for it:

    from urlkit.core.logs import setup_logging

    logger = setup_logging("crawler")

With `DEBUG_VERBOSE=1`, the rejected URLs and the failed resolutions are then
logged at DEBUG level, next to the application logs.  Records are colored on a
terminal, and emitted as JSON lines when running in Kubernetes, so that they can
be collected with the application logs.
"""

import logging
import sys

from pythonjsonlogger.json import JsonFormatter
from termcolor import colored

from urlkit.config import UrlkitConfig

LIBRARY_LOGGER = "urlkit"

##
## Formatters
##


class UrlkitFormatter(logging.Formatter):
    """Colors each record after its level (tracebacks stand out)."""

    def format(self, record: logging.LogRecord) -> str:
        result = super().format(record)

        color: str | None = None
        if "Traceback" in result:
            color = "light_red"
        elif record.levelno >= logging.ERROR:
            color = "red"
        elif record.levelno >= logging.WARNING:
            color = "yellow"
        elif record.levelno >= logging.INFO:
            color = "blue"

        return colored(result, color) if color else result


def _get_log_formatter() -> logging.Formatter:
    if UrlkitConfig.is_kubernetes():
        return JsonFormatter("%(asctime)%(levelname)%(name)%(message)")
    else:
        return UrlkitFormatter(fmt="%(levelname)7s - %(name)-0s - %(message)s")


##
## Setup
##


def setup_logging(
    app_name: str | None = None,
    log_level: int | None = None,
) -> logging.Logger:
    """
    Send the "urlkit" logs to the console, at the level implied by
    `DEBUG_VERBOSE`, then do the same for the logger of the application when
    `app_name` is given (at `log_level`, or the same level as urlkit).

    - WARNING and above go to stderr, lower levels to stdout.
    - Calling it again replaces the handlers instead of duplicating the output.

    Returns the logger of the application, or the "urlkit" logger.
    """
    formatter = _get_log_formatter()
    library_logger = _configure_logger(
        LIBRARY_LOGGER, UrlkitConfig.log_level, formatter
    )
    if not app_name or app_name == LIBRARY_LOGGER:
        return library_logger

    app_level = UrlkitConfig.log_level if log_level is None else log_level
    return _configure_logger(app_name, app_level, formatter)


def _configure_logger(
    name: str,
    log_level: int,
    formatter: logging.Formatter,
) -> logging.Logger:
    logger = logging.getLogger(name)
    logger.setLevel(log_level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    logger.addHandler(_stream_handler(sys.stderr, logging.WARNING, formatter))
    if log_level < logging.WARNING:
        stdout_handler = _stream_handler(sys.stdout, logging.DEBUG, formatter)
        stdout_handler.addFilter(lambda record: record.levelno < logging.WARNING)
        logger.addHandler(stdout_handler)

    return logger


def _stream_handler(
    stream,
    level: int,
    formatter: logging.Formatter,
) -> logging.StreamHandler:
    handler = logging.StreamHandler(stream)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler
