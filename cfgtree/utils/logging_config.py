"""
Logging setup for cfgtree.

Library modules obtain their logger once via ``logger = get_logger(__name__)``.
All of them are children of the ``cfgtree`` package logger, which carries the
handlers and the level. Handlers are only attached by
:func:`configure_logging`, so importing cfgtree never writes log output
on its own.
"""

import logging
import logging.handlers
from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar

from cfgtree.utils.files import create_directory, dir_name

PACKAGE_LOGGER_NAME = "cfgtree"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEBUG_LOG_FORMAT = (
    "%(asctime)s - %(name)s - [%(filename)s:%(lineno)d] - %(levelname)s - %(message)s"
)

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

LOG_FILE_MAX_BYTES = 1048576  # 1MB
LOG_FILE_BACKUP_COUNT = 3

_loggers: dict[str, logging.Logger] = {}


def _level_from_name(level: str) -> int:
    try:
        return LOG_LEVELS[level.upper()]
    except KeyError as e:
        raise ValueError(
            f"Unknown log level '{level}', expected one of {', '.join(LOG_LEVELS)}"
        ) from e


def _create_console_handler(
    log_level: int, formatter: logging.Formatter
) -> logging.StreamHandler:
    """
    Create a handler writing to standard error.

    :param log_level: Logging level for the handler
    :type log_level: int
    :param formatter: Formatter for log messages
    :type formatter: logging.Formatter
    :return: Configured console handler
    :rtype: logging.StreamHandler
    """
    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    return console_handler


def _create_file_handler(
    log_path: str, log_level: int, formatter: logging.Formatter
) -> logging.handlers.RotatingFileHandler:
    """
    Create a rotating handler appending to ``log_path``.

    Missing parent directories are created.

    :param log_path: Path of the log file
    :type log_path: str
    :param log_level: Logging level for the handler
    :type log_level: int
    :param formatter: Formatter for log messages
    :type formatter: logging.Formatter
    :return: Configured rotating file handler
    :rtype: logging.handlers.RotatingFileHandler
    """
    log_directory = dir_name(log_path)
    if log_directory:
        create_directory(log_directory)

    file_handler = logging.handlers.RotatingFileHandler(
        log_path,
        mode="a",
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setLevel(log_level)
    file_handler.setFormatter(formatter)
    return file_handler


def get_logger(name: str) -> logging.Logger:
    """
    Return the logger for a cfgtree module.

    :param name: Logger name (typically __name__)
    :type name: str
    :return: Cached logger instance
    :rtype: logging.Logger
    """
    if name not in _loggers:
        _loggers[name] = logging.getLogger(name)
    return _loggers[name]


def configure_logging(
    level: str = "WARNING", log_file: str | None = None, console: bool = True
) -> logging.Logger:
    """
    Attach handlers to the ``cfgtree`` package logger.

    Handlers of a previous call are closed and replaced. At DEBUG level the
    messages include file name and line number.

    :param level: Logging level as string (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    :type level: str
    :param log_file: Optional path of a rotating log file
    :type log_file: str | None
    :param console: Whether to log to standard error
    :type console: bool
    :return: The package logger
    :rtype: logging.Logger
    :raises ValueError: If the level name is unknown
    """
    log_level = _level_from_name(level)
    package_logger = get_logger(PACKAGE_LOGGER_NAME)

    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(
        DEBUG_LOG_FORMAT if log_level == logging.DEBUG else LOG_FORMAT
    )
    if console:
        package_logger.addHandler(_create_console_handler(log_level, formatter))
    if log_file:
        package_logger.addHandler(_create_file_handler(log_file, log_level, formatter))

    package_logger.setLevel(log_level)
    return package_logger


T = TypeVar("T", bound=Callable[..., Any])


def log_function_call(logger: logging.Logger) -> Callable[[T], T]:
    """
    Decorator logging the arguments, result and exceptions of a function.

    Calls and results are logged at DEBUG level, exceptions at ERROR level
    before they propagate.

    :param logger: Logger instance to use
    :type logger: logging.Logger
    """

    def decorator(func: T) -> T:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            arguments = [repr(a) for a in args]
            arguments += [f"{k}={v!r}" for k, v in kwargs.items()]
            logger.debug(f"Calling {func.__name__}({', '.join(arguments)})")

            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.error(f"{func.__name__} raised {type(e).__name__}: {e}")
                raise
            logger.debug(f"{func.__name__} returned {result!r}")
            return result

        return wrapper  # type: ignore[return-value]

    return decorator
