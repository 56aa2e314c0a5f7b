"""Named rotating-file loggers that also forward records over a ZeroMQ PUSH socket."""

from __future__ import annotations

import logging
import threading
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Dict, Optional, Union

import zmq

DEFAULT_ENDPOINT = "tcp://127.0.0.1:45875"
DEFAULT_LOGGER = "default"
DEFAULT_LOGS_DIR = "logs"
DEFAULT_MAX_FILE_SIZE = 1024 * 1024 * 10
DEFAULT_MAX_FILES = 5

LOG_FORMAT = "[%(asctime)s.%(msecs)03d] [%(name)s] [%(levelname)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class _Formatter(logging.Formatter):
    """Formats records with lower-case level names."""

    def __init__(self) -> None:
        super().__init__(LOG_FORMAT, DATE_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        copy = logging.makeLogRecord(record.__dict__)
        copy.levelname = record.levelname.lower()
        return super().format(copy)


class ZmqHandler(logging.Handler):
    """Sends each formatted record as one ZeroMQ message without blocking."""

    def __init__(self, socket: zmq.Socket) -> None:
        super().__init__()
        self.socket = socket

    def emit(self, record: logging.LogRecord) -> None:
        try:
            payload = self.format(record).encode("utf-8")
        except Exception:
            self.handleError(record)
            return
        try:
            self.socket.send(payload, zmq.NOBLOCK)
        except zmq.Again:
            # Nobody can take the message right now; it is dropped.
            pass
        except zmq.ZMQError:
            self.handleError(record)

    def flush(self) -> None:
        """Messages leave immediately; there is nothing to flush."""

    def close(self) -> None:
        self.acquire()
        try:
            if not self.socket.closed:
                self.socket.close(linger=0)
        finally:
            self.release()
        super().close()


class LoggerManager:
    """Owns the application's named loggers."""

    _instance: Optional["LoggerManager"] = None
    _instance_lock = threading.Lock()

    def __init__(self, endpoint: str = DEFAULT_ENDPOINT) -> None:
        self.endpoint = endpoint
        self.logs_dir = Path(DEFAULT_LOGS_DIR)
        self._loggers: Dict[str, logging.Logger] = {}
        self._lock = threading.RLock()
        self._zmq_lock = threading.Lock()
        self._context: Optional[zmq.Context] = None
        self._formatter = _Formatter()

    @classmethod
    def instance(cls) -> "LoggerManager":
        """Return the process-wide manager, creating it on first use."""
        with cls._instance_lock:
            if cls._instance is None:
                cls._instance = cls()
            return cls._instance

    def initialize(
        self,
        logs_dir: Union[str, Path] = DEFAULT_LOGS_DIR,
        level: int = logging.INFO,
    ) -> logging.Logger:
        """Set the log directory and create the default logger."""
        self.logs_dir = Path(logs_dir)
        return self.create_logger(DEFAULT_LOGGER, level)

    def create_logger(
        self,
        name: str,
        level: int = logging.INFO,
        max_file_size: int = DEFAULT_MAX_FILE_SIZE,
        max_files: int = DEFAULT_MAX_FILES,
    ) -> logging.Logger:
        """Return the logger called ``name``, creating it if needed.

        If its log file cannot be opened, the failure is logged on the
        default logger and the default logger is returned instead.
        """
        with self._lock:
            existing = self._loggers.get(name)
            if existing is not None:
                return existing

            path = self.logs_dir / f"{name}.log"
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                file_handler = RotatingFileHandler(
                    path,
                    maxBytes=max_file_size,
                    backupCount=max_files,
                    encoding="utf-8",
                )
            except OSError as exc:
                default = self._loggers.get(DEFAULT_LOGGER)
                if default is None:
                    raise
                default.error("Failed to create logger '%s': %s", name, exc)
                return default

            file_handler.setFormatter(self._formatter)
            logger = logging.Logger(name, level)
            logger.propagate = False
            logger.addHandler(file_handler)
            self._loggers[name] = logger
            self._add_zmq_handler(logger)
            return logger

    def get_logger(self, name: str) -> logging.Logger:
        """Return the named logger, or the default one with a warning."""
        with self._lock:
            logger = self._loggers.get(name)
            if logger is not None:
                return logger
            default = self._loggers.get(DEFAULT_LOGGER)
        if default is None:
            raise LookupError("LoggerManager is not initialized")
        default.warning("Logger '%s' not found, using default", name)
        return default

    def set_level(self, name: str, level: int) -> None:
        self.get_logger(name).setLevel(level)

    def shutdown(self) -> None:
        """Close every handler and forget all loggers."""
        with self._lock:
            for logger in self._loggers.values():
                for handler in list(logger.handlers):
                    logger.removeHandler(handler)
                    handler.close()
            self._loggers.clear()
        with self._zmq_lock:
            if self._context is not None:
                self._context.term()
                self._context = None

    def _add_zmq_handler(self, logger: logging.Logger) -> None:
        with self._zmq_lock:
            if self._context is None:
                self._context = zmq.Context()
            sock = self._context.socket(zmq.PUSH)
            sock.setsockopt(zmq.LINGER, 0)
            sock.connect(self.endpoint)
            handler = ZmqHandler(sock)
            handler.setFormatter(self._formatter)
            logger.addHandler(handler)