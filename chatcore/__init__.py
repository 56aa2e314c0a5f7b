"""Chat client core: CLI states, an application lifecycle runner and logging pushed over ZeroMQ."""

__version__ = "0.1.0"
__all__ = ["cli", "log_viewer", "logging_manager", "starter"]