import sys
import logging
import os
import threading
from contextvars import ContextVar
from loguru import logger

logger.remove()
logger.add(sys.stdout, colorize=True)

level_dict = {
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
    "ERROR": logging.ERROR,
    "WARN": logging.WARN,
    "WARNING": logging.WARNING,
    "CRITICAL": logging.CRITICAL,
    "FATAL": logging.FATAL,
}

FORMAT = "%(asctime)s pipeline=%(pipeline)s run=%(run_id)s %(levelname)s %(name)s %(filename)s:%(lineno)s:%(funcName)s %(message)s"
CONSOLE_FORMAT = "pipeline=%(pipeline)s run=%(run_id)s %(name)s %(message)s"

# Maximum log file size in bytes (5MB)
MAX_LOG_SIZE = 5 * 1024 * 1024
# Maximum number of log files to keep
MAX_LOG_FILES = 5

ROOT_LOGGER = "dataproc"

# scope of the pipeline run currently logging in this context
current_scope = ContextVar("dataproc_log_scope", default=None)

_attached = []
_base_level = logging.NOTSET
_attach_lock = threading.Lock()


def get_level(level_name: str) -> int:
    """Resolve a level name, ValueError for unknown names."""
    try:
        return level_dict[level_name.upper()]
    except KeyError:
        raise ValueError(f"Unknown log level: {level_name}") from None


def _sync_level(std_logger):
    levels = [h.level for h in _attached]
    if _base_level != logging.NOTSET:
        levels.append(_base_level)
    std_logger.setLevel(min(levels) if levels else _base_level)


def attach_handler(handler):
    """Add a handler to the dataproc logger, lowering its level if needed."""
    global _base_level
    std_logger = logging.getLogger(ROOT_LOGGER)
    with _attach_lock:
        if not _attached:
            _base_level = std_logger.level
        _attached.append(handler)
        std_logger.addHandler(handler)
        _sync_level(std_logger)


def detach_handler(handler):
    """Remove and close a handler, restoring the logger level once none remain."""
    std_logger = logging.getLogger(ROOT_LOGGER)
    with _attach_lock:
        std_logger.removeHandler(handler)
        if handler in _attached:
            _attached.remove(handler)
        _sync_level(std_logger)
    handler.close()


class PipelineFilter(logging.Filter):
    """Attach pipeline name and run id to every record.

    With a scope set, only records logged while that scope is current pass.
    """

    def __init__(self, pipeline: str, run_id=None, scope=None) -> None:
        super().__init__("")
        self.pipeline = pipeline
        self.run_id = run_id
        self.scope = scope

    def filter(self, record):
        if self.scope is not None and current_scope.get() is not self.scope:
            return False
        record.pipeline = self.pipeline
        record.run_id = self.run_id

        return True


class PipelineFileHandler:
    """Create logging file handler with rotation."""

    def __init__(
        self,
        pipeline,
        run_id=None,
        log_file="dataproc_log.txt",
        log_level="INFO",
        format=FORMAT,
        max_size=MAX_LOG_SIZE,
        backup_count=MAX_LOG_FILES,
        scope=None,
    ):
        self.filter = PipelineFilter(pipeline, run_id, scope)
        self.format = format
        self.log_file = log_file
        self.log_level = get_level(log_level)
        self.max_size = max_size
        self.backup_count = backup_count
        self.handler = None

    def _rotate_logs(self):
        """Rotate log files to prevent excessive growth."""
        if os.path.exists(self.log_file):
            file_size = os.path.getsize(self.log_file)
            if file_size > self.max_size:
                for i in range(self.backup_count - 1, 0, -1):
                    old_file = f"{self.log_file}.{i}"
                    new_file = f"{self.log_file}.{i + 1}"
                    if os.path.exists(old_file):
                        os.replace(old_file, new_file)

                os.replace(self.log_file, f"{self.log_file}.1")

    def set_format(self):
        """Attach a file handler to the dataproc logger."""
        self._rotate_logs()

        file_handler = logging.FileHandler(
            self.log_file,
            mode="a",
            encoding="utf8",
        )
        file_handler.setLevel(self.log_level)
        file_handler.setFormatter(logging.Formatter(self.format))
        file_handler.addFilter(self.filter)
        self.handler = file_handler
        attach_handler(file_handler)

        return logging.getLogger(ROOT_LOGGER)

    def close(self):
        if self.handler is not None:
            detach_handler(self.handler)
            self.handler = None


class LoguruHandler(logging.Handler):
    """Forward stdlib records to the loguru console sink."""

    def emit(self, record):
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        message = self.format(record)
        logger.opt(exception=record.exc_info).log(level, message)


class PipelineConsoleHandler:
    """Create console handler backed by loguru."""

    def __init__(self, pipeline, run_id=None, log_level="INFO", format=CONSOLE_FORMAT, scope=None):
        self.filter = PipelineFilter(pipeline, run_id, scope)
        self.format = format
        self.log_level = get_level(log_level)
        self.handler = None

    def set_format(self):
        console_handler = LoguruHandler()
        console_handler.setLevel(self.log_level)
        console_handler.setFormatter(logging.Formatter(self.format))
        console_handler.addFilter(self.filter)
        self.handler = console_handler
        attach_handler(console_handler)

        return logging.getLogger(ROOT_LOGGER)

    def close(self):
        if self.handler is not None:
            detach_handler(self.handler)
            self.handler = None
