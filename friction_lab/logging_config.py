"""Centralized logging configuration for the friction lab."""

import json
import logging
import logging.config
import uuid
from typing import Optional

from .config_models import LabConfig
from .models import MeasurementReading


class ContextFilter(logging.Filter):
    """Inject the lab session id into log records."""

    def __init__(self, session_id: str):
        super().__init__()
        self.session_id = session_id

    def filter(self, record: logging.LogRecord) -> bool:
        record.session_id = self.session_id
        return True


class JSONFormatter(logging.Formatter):
    """Custom formatter that outputs structured JSON logs."""

    def format(self, record: logging.LogRecord) -> str:
        """
        Format the log record as JSON.

        Args:
            record: Log record to format

        Returns:
            JSON-formatted log string
        """
        log_data = {
            "timestamp": self.formatTime(record),
            "logger": record.name,
            "level": record.levelname,
            "session_id": getattr(record, "session_id", "unknown"),
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Add any extra fields
        for key, value in record.__dict__.items():
            if key not in log_data and not key.startswith("_"):
                log_data[key] = value

        return json.dumps(log_data, default=str)


def setup_logging(config: LabConfig, session_id: Optional[str] = None) -> str:
    """
    Configure the logging system.

    Args:
        config: Lab configuration
        session_id: Lab session identifier. If None, a new UUID will be generated.

    Returns:
        The session_id used for logging
    """
    if session_id is None:
        session_id = str(uuid.uuid4())

    handlers = {
        "console": {
            "class": "logging.StreamHandler",
            "level": config.logging.level,
            "formatter": "console",
            "filters": ["context"],
            "stream": "ext://sys.stdout"
        }
    }

    log_file = None
    if config.logging.log_to_file:
        log_dir = config.paths.log_dir
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / f"session_{session_id}.log"
        handlers["file"] = {
            "class": "logging.FileHandler",
            "level": "DEBUG",  # Always capture debug and above to file
            "formatter": "json",
            "filters": ["context"],
            "filename": str(log_file),
            "mode": "w"
        }

    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "console": {
                "format": config.logging.format_console,
                "datefmt": "%Y-%m-%d %H:%M:%S"
            },
            "json": {
                "()": JSONFormatter,
                "datefmt": "%Y-%m-%d %H:%M:%S"
            }
        },
        "filters": {
            "context": {
                "()": ContextFilter,
                "session_id": session_id
            }
        },
        "handlers": handlers,
        "root": {
            "level": "DEBUG",
            "handlers": list(handlers)
        },
        "loggers": {
            "friction_lab": {
                "level": "DEBUG",
                "propagate": True
            }
        }
    }

    logging.config.dictConfig(logging_config)

    logger = logging.getLogger(__name__)
    logger.info(f"Logging initialized for lab session {session_id}")
    if log_file is not None:
        logger.debug(f"Log file: {log_file}")

    return session_id


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)


class LogCapture:
    """Context manager for capturing log records in memory."""

    def __init__(self, logger_name: str = ""):
        """
        Initialize log capture.

        Args:
            logger_name: Name of logger to capture (empty for root)
        """
        self.logger_name = logger_name
        self.handler: Optional[logging.Handler] = None
        self.logs: list = []

    def __enter__(self) -> "LogCapture":
        class CaptureHandler(logging.Handler):
            def __init__(self, capture_func):
                super().__init__()
                self.capture_func = capture_func

            def emit(self, record):
                self.capture_func(record)

        self.handler = CaptureHandler(self._capture_log)
        logging.getLogger(self.logger_name).addHandler(self.handler)
        return self

    def __exit__(self, exc_type: type, exc_val: Exception, exc_tb: object) -> None:
        if self.handler:
            logging.getLogger(self.logger_name).removeHandler(self.handler)

    def _capture_log(self, record: logging.LogRecord) -> None:
        self.logs.append({
            "level": record.levelname,
            "message": record.getMessage(),
            "timestamp": record.created,
            "logger": record.name
        })

    def get_logs(self, level: Optional[str] = None) -> list:
        """
        Get captured logs.

        Args:
            level: Optional level filter

        Returns:
            List of log records
        """
        if level is None:
            return self.logs.copy()
        return [log for log in self.logs if log["level"] == level]


def log_reading(logger: logging.Logger, reading: MeasurementReading) -> None:
    """
    Log a finalized measurement with structured data.

    Args:
        logger: Logger instance
        reading: Settled measurement reading
    """
    extra_data = {
        "channel": reading.channel.value,
        "raw_theoretical": reading.raw_theoretical,
        "measured_value": reading.measured_value,
        "is_overloaded": reading.is_overloaded
    }

    status = "OVERLOAD" if reading.is_overloaded else "OK"
    logger.info(
        f"READING {status}: {reading.channel.value} = {reading.measured_value:.2f} N "
        f"(theory {reading.raw_theoretical:.2f} N)",
        extra=extra_data
    )
