"""Application lifecycle: initialise, run a loop, shut down."""

from __future__ import annotations

import logging
import signal
import threading
from typing import Callable, Optional

from chatcore.logging_manager import DEFAULT_LOGGER, LoggerManager

Callback = Callable[[], None]


class ApplicationStarter:
    """Drives start-up, the run loop and shutdown through user callbacks."""

    def __init__(
        self,
        logger_manager: Optional[LoggerManager] = None,
        init_callback: Optional[Callback] = None,
        run_callback: Optional[Callback] = None,
        shutdown_callback: Optional[Callback] = None,
    ) -> None:
        self.logger_manager = (
            logger_manager if logger_manager is not None else LoggerManager.instance()
        )
        self.init_callback = init_callback
        self.run_callback = run_callback
        self.shutdown_callback = shutdown_callback
        self._running = threading.Event()
        self._logger: Optional[logging.Logger] = None

    def install_signal_handlers(self) -> None:
        """Stop the application on SIGINT and SIGTERM."""
        for signum in (signal.SIGINT, signal.SIGTERM):
            signal.signal(signum, self._handle_signal)

    def _handle_signal(self, signum, frame) -> None:
        self.stop()

    @property
    def running(self) -> bool:
        return self._running.is_set()

    def _initialize_core(self) -> None:
        self.logger_manager.initialize()
        self._logger = self.logger_manager.get_logger(DEFAULT_LOGGER)
        self._logger.info("Core initialized")

    def _initialize_components(self) -> None:
        if self.init_callback is not None:
            self.init_callback()
            self._logger.info("Components initialized")

    def _shutdown_components(self) -> None:
        self.logger_manager.shutdown()

    def start(self) -> None:
        """Initialise, then call the run callback until stopped.

        A failure after logging is up is logged as critical and the
        components are shut down; a failure before that is raised.
        """
        try:
            self._initialize_core()
            self._initialize_components()

            self._running.set()
            self._logger.info("Application started")

            if self.run_callback is not None:
                while self._running.is_set():
                    self.run_callback()
        except Exception as exc:
            self._running.clear()
            if self._logger is None:
                raise
            self._logger.critical("Startup failed: %s", exc)
            self._shutdown_components()

    def stop(self) -> None:
        """End the run loop, run the shutdown callback and release logging."""
        self._running.clear()
        if self._logger is not None:
            self._logger.info("Shutting down...")
        if self.shutdown_callback is not None:
            self.shutdown_callback()
        self._shutdown_components()