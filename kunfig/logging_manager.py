import inspect
import logging
import os
from datetime import datetime
from typing import Optional

from colorama import Style

from .colors import get_color, init_colorama

LOGGER_NAMES = ("progress", "verbose")
# Color used for records logged without an explicit log_type.
LEVEL_LOG_TYPES = {logging.WARNING: "warning", logging.ERROR: "error", logging.CRITICAL: "error"}


class ColorFormatter(logging.Formatter):
    """Custom formatter that colorizes log messages based on log_type.

    Applies colorama color codes to messages and caller info based on the
    log_type attribute (info, warning, error, success, etc.).
    """

    def format(self, record: logging.LogRecord) -> str:
        """Adds color codes to log messages based on log_type."""
        log_type = getattr(record, "log_type", None) or LEVEL_LOG_TYPES.get(record.levelno, "default")
        message_color = get_color(log_type)
        message = record.getMessage()
        caller_info = getattr(record, "caller_info", "")
        if not caller_info:
            return f"{message_color}{message}{Style.RESET_ALL}"
        return f"{message_color}{message}{Style.RESET_ALL} {get_color('caller')}{caller_info}{Style.RESET_ALL}"


class CustomFormatter(logging.Formatter):
    """Formatter that safely handles optional caller_info attribute."""

    def format(self, record: logging.LogRecord) -> str:
        """Formats the record, safely handling the 'caller_info' attribute."""
        base_message = super().format(record)
        caller_info = getattr(record, "caller_info", "")
        if caller_info:
            return f"{base_message} {caller_info}"
        return base_message


def _rotate_logs(log_dir: str, keep: int):
    log_files = [os.path.join(log_dir, f) for f in os.listdir(log_dir) if f.endswith(".log")]
    log_files.sort(key=os.path.getctime)
    while len(log_files) >= keep:
        old_log = log_files.pop(0)
        try:
            os.remove(old_log)
        except OSError as e:
            logging.getLogger("verbose").warning(f"Failed to remove old log {os.path.basename(old_log)}: {e}")


def setup_loggers(
    log_dir: Optional[str] = None, level: int = logging.INFO, keep: int = 30
) -> tuple[logging.Logger, logging.Logger]:
    """Sets up the 'progress' and 'verbose' loggers.

    Both loggers print colored messages to the console. When `log_dir` is
    given, they also append to a timestamped log file there, and the oldest
    files are removed once more than `keep` exist.

    Args:
        log_dir: Optional directory for the log file.
        level: Logging level applied to both loggers.
        keep: Maximum number of log files kept in `log_dir`.

    Returns:
        Tuple of (progress_logger, verbose_logger).
    """
    init_colorama()
    console_formatter = ColorFormatter()

    file_handler = None
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        _rotate_logs(log_dir, keep)
        session_timestamp = datetime.now().strftime("%d-%m_%H-%M-%S")
        file_handler = logging.FileHandler(os.path.join(log_dir, f"{session_timestamp}.log"), mode="a", encoding="utf-8")
        file_handler.setFormatter(CustomFormatter("%(asctime)s - %(levelname)s - %(message)s"))

    loggers = []
    for name in LOGGER_NAMES:
        logger = logging.getLogger(name)
        logger.setLevel(level)
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)

        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(console_formatter)
        logger.addHandler(stream_handler)
        if file_handler is not None:
            logger.addHandler(file_handler)
        logger.propagate = False
        loggers.append(logger)

    if file_handler is not None:
        loggers[1].debug(f"--- Logging started for file: {os.path.abspath(file_handler.baseFilename)} ---")

    return loggers[0], loggers[1]


def shutdown_loggers():
    """Safely shuts down all logging handlers to release file locks."""
    for name in LOGGER_NAMES:
        logger = logging.getLogger(name)
        for handler in logger.handlers[:]:
            handler.close()
            logger.removeHandler(handler)


class LoggingMixin:
    """A mixin class that provides a standardized logging interface.

    Provides a `_log` method that directs messages to the appropriate logger
    ('progress' or 'verbose') and tags them with the calling method.
    """

    progress_logger: logging.Logger
    verbose_logger: logging.Logger

    def _log(self, message: str, level: str = "verbose", log_type: str = "default"):
        """Logs a message with a specified level and color-coding type.

        Args:
            message: The message to be logged.
            level: The logging level ('progress' or 'verbose').
            log_type: A string key that maps to a color for terminal output.
        """
        extra = {"log_type": log_type}
        log_origin = ""

        current_frame = inspect.currentframe()
        if current_frame:
            caller_frame = current_frame.f_back
            if caller_frame:
                caller_method_name = caller_frame.f_code.co_name
                if "self" in caller_frame.f_locals:
                    caller_class_name = caller_frame.f_locals["self"].__class__.__name__
                    log_origin = f"{caller_class_name}.{caller_method_name}"
                else:
                    log_origin = caller_method_name
        extra["caller_info"] = f"[{log_origin}]"

        if level == "progress":
            self.progress_logger.info(message, extra=extra)
        else:
            self.verbose_logger.info(message, extra=extra)
