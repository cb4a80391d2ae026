import logging
import os
from unittest.mock import MagicMock

from colorama import Fore

from kunfig.logging_manager import ColorFormatter, CustomFormatter, LoggingMixin, setup_loggers, shutdown_loggers


def _record(message: str, level: int = logging.INFO, **extra) -> logging.LogRecord:
    record = logging.LogRecord("verbose", level, __file__, 1, message, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_setup_loggers():
    progress_logger, verbose_logger = setup_loggers()
    assert isinstance(progress_logger, logging.Logger)
    assert isinstance(verbose_logger, logging.Logger)
    assert progress_logger.name == "progress"
    assert verbose_logger.name == "verbose"
    assert not verbose_logger.propagate
    shutdown_loggers()
    assert not verbose_logger.handlers


def test_setup_loggers_writes_file(tmp_path):
    log_dir = tmp_path / "logs"
    _, verbose_logger = setup_loggers(log_dir=str(log_dir))
    verbose_logger.info("hello from the test")
    shutdown_loggers()

    log_files = [f for f in os.listdir(log_dir) if f.endswith(".log")]
    assert len(log_files) == 1
    assert "hello from the test" in (log_dir / log_files[0]).read_text()


def test_setup_loggers_rotates_old_files(tmp_path):
    for index in range(3):
        (tmp_path / f"old_{index}.log").write_text("old")
    setup_loggers(log_dir=str(tmp_path), keep=2)
    shutdown_loggers()
    assert len([f for f in os.listdir(tmp_path) if f.endswith(".log")]) == 2


def test_color_formatter_uses_log_type():
    formatted = ColorFormatter().format(_record("done", log_type="error", caller_info="[Cls.meth]"))
    assert formatted.startswith(Fore.RED + "done")
    assert "[Cls.meth]" in formatted


def test_color_formatter_falls_back_to_level():
    assert ColorFormatter().format(_record("careful", level=logging.WARNING)).startswith(Fore.YELLOW)
    assert ColorFormatter().format(_record("plain")).startswith(Fore.WHITE)


def test_custom_formatter_appends_caller_info():
    formatter = CustomFormatter("%(levelname)s - %(message)s")
    assert formatter.format(_record("msg", caller_info="[x]")) == "INFO - msg [x]"
    assert formatter.format(_record("msg")) == "INFO - msg"


class TestLoggingMixin:
    def test_log_method(self):
        mixin = LoggingMixin()
        mixin.progress_logger = MagicMock()
        mixin.verbose_logger = MagicMock()

        mixin._log("test progress", level="progress")
        mixin.progress_logger.info.assert_called_once()

        mixin._log("test verbose", level="verbose")
        mixin.verbose_logger.info.assert_called_once()

    def test_log_caller_info(self):
        class Loader(LoggingMixin):
            def load(self):
                self._log("loading", log_type="info")

        loader = Loader()
        loader.progress_logger = MagicMock()
        loader.verbose_logger = MagicMock()
        loader.load()
        _, kwargs = loader.verbose_logger.info.call_args
        assert kwargs["extra"] == {"log_type": "info", "caller_info": "[Loader.load]"}
