import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

from coachloop.core.config import get_settings

_FORMAT = "[%(asctime)s] [%(name)s] %(levelname)s %(message)s"
_DATEFMT = "%H:%M:%S"


def _build_file_handler(log_path: str) -> RotatingFileHandler:
    file_handler = RotatingFileHandler(log_path, maxBytes=5_000_000, backupCount=3)
    file_handler.setFormatter(logging.Formatter(_FORMAT, _DATEFMT))
    file_handler.setLevel(logging.DEBUG)
    file_handler.name = "coachloop_file"
    return file_handler


def _build_stream_handler(level: int) -> logging.StreamHandler:
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(logging.Formatter(_FORMAT, _DATEFMT))
    stream_handler.setLevel(level)
    stream_handler.name = "coachloop_stream"
    return stream_handler


def _replace_handlers(logger: logging.Logger, handlers: list[logging.Handler]) -> None:
    logger.handlers = []
    for handler in handlers:
        logger.addHandler(handler)
    logger.propagate = False


def configure_logging(logs_dir: Optional[str] = None) -> str:
    """Route coachloop and uvicorn loggers to the console and a rotating file.

    Returns the path of the log file.
    """
    settings = get_settings()
    logs_dir = logs_dir or settings.logs_dir
    os.makedirs(logs_dir, exist_ok=True)
    log_path = os.path.join(logs_dir, "coachloop.log")
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    file_handler = _build_file_handler(log_path)
    stream_handler = _build_stream_handler(level)

    app_logger = logging.getLogger("coachloop")
    app_logger.setLevel(logging.DEBUG)
    _replace_handlers(app_logger, [file_handler, stream_handler])

    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        uv_logger = logging.getLogger(name)
        uv_logger.setLevel(logging.INFO)
        _replace_handlers(uv_logger, [file_handler, stream_handler])

    app_logger.info("Logging initialized: %s", log_path)
    return log_path
