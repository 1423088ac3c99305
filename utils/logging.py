import atexit
import json
import logging
import logging.handlers
import queue
from pathlib import Path

from config.config_loader import ConfigLoader

_queue_listener: logging.handlers.QueueListener | None = None
_atexit_registered = False

# Extra attributes copied from log records into the JSON payload
_EXTRA_FIELDS = (
    "guild_id",
    "cache_key",
    "status_code",
    "endpoint",
    "method",
    "cache_backend",
)


class ErrorLevelFilter(logging.Filter):
    """Allow only error-or-higher log records."""

    def filter(self, record: logging.LogRecord) -> bool:  # pragma: no cover - trivial
        return record.levelno >= logging.ERROR


class CustomJsonFormatter(logging.Formatter):
    def __init__(self, datefmt: str | None = None) -> None:
        super().__init__(datefmt=datefmt)

    def format(self, record: logging.LogRecord) -> str:
        record_dict = {
            "time": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "module": record.name,
            "funcName": record.funcName,
            "lineno": record.lineno,
            "message": record.getMessage(),
        }

        # Include request_id from context if available
        from web.backend.core.request_id import get_request_id

        request_id = getattr(record, "request_id", None) or get_request_id()
        if request_id:
            record_dict["request_id"] = request_id

        for field in _EXTRA_FIELDS:
            if hasattr(record, field):
                record_dict[field] = getattr(record, field)

        if record.exc_info:
            record_dict["traceback"] = self.formatException(record.exc_info)

        return json.dumps(record_dict, ensure_ascii=False, default=str)


def setup_logging(log_file: str | None = None) -> None:
    """
    Setup structured logging with JSON formatting and queue-based async handling.

    Console output is always enabled. When a log file is given (or configured
    under ``logging.file``) records are also written there with daily rotation,
    and errors go to a dedicated ``errors/errors.jsonl`` sidecar.

    Args:
        log_file: Optional path to the log file
    """
    logging_config = ConfigLoader.get_section("logging")
    log_level_name = str(logging_config.get("level", "INFO")).upper()
    log_level = getattr(logging, log_level_name, logging.INFO)

    if log_file is None:
        log_file = logging_config.get("file") or None

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    # Stop any existing listener before creating a new one (e.g., during tests)
    global _queue_listener
    if _queue_listener:
        _queue_listener.stop()
        _queue_listener = None

    if log_file:
        errors_dir = Path(log_file).parent / "errors"
        errors_dir.mkdir(parents=True, exist_ok=True)

    log_queue: queue.Queue[logging.LogRecord] = queue.Queue(maxsize=1000)
    queue_listener = _build_queue_listener(log_queue, log_level, log_file)

    queue_handler = logging.handlers.QueueHandler(log_queue)
    queue_handler.setLevel(log_level)
    root_logger.addHandler(queue_handler)

    queue_listener.start()
    _queue_listener = queue_listener

    _register_logging_shutdown()

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def _build_queue_listener(
    log_queue: queue.Queue, log_level: int, log_file: str | None
) -> logging.handlers.QueueListener:
    """
    Creates a QueueListener that will dispatch logs from the queue
    to the console and, when configured, file handlers.

    Args:
        log_queue: The queue to pull log records from
        log_level: The logging level to use
        log_file: Optional path to the log file
    """
    formatter = CustomJsonFormatter(datefmt="%Y-%m-%d %H:%M:%S")

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    handlers: list[logging.Handler] = [console_handler]

    if log_file:
        file_handler = logging.handlers.TimedRotatingFileHandler(
            filename=log_file,
            when="midnight",
            interval=1,
            backupCount=30,
            utc=True,
            encoding="utf-8",
        )
        file_handler.suffix = "%Y-%m-%d"
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)

        errors_dir = Path(log_file).parent / "errors"
        error_handler = logging.handlers.TimedRotatingFileHandler(
            filename=str(errors_dir / "errors.jsonl"),
            when="midnight",
            interval=1,
            backupCount=30,
            utc=True,
            encoding="utf-8",
        )
        error_handler.suffix = "%Y-%m-%d"
        error_handler.namer = _error_log_namer  # type: ignore[assignment]
        error_handler.setLevel(logging.ERROR)
        error_handler.addFilter(ErrorLevelFilter())
        error_handler.setFormatter(formatter)

        handlers.extend([file_handler, error_handler])

    return logging.handlers.QueueListener(
        log_queue,
        *handlers,
        respect_handler_level=True,
    )


def _error_log_namer(default_name: str) -> str:
    """
    Rename rotated error files to match the errors_YYYY-MM-DD.jsonl pattern.
    """

    # Default name: /path/errors.jsonl.YYYY-MM-DD
    base_without_suffix, date_part = default_name.rsplit(".", 1)
    base_path = Path(base_without_suffix)
    return str(base_path.with_name(f"errors_{date_part}.jsonl"))


def _register_logging_shutdown() -> None:
    """Ensure the queue listener is stopped during interpreter shutdown."""

    global _atexit_registered

    if _atexit_registered:
        return

    def _shutdown_listener() -> None:
        global _queue_listener
        if _queue_listener:
            _queue_listener.stop()
            _queue_listener = None

    atexit.register(_shutdown_listener)
    _atexit_registered = True


def get_logger(name: str) -> logging.Logger:
    """
    Convenience method for retrieving a logger
    """
    return logging.getLogger(name)
