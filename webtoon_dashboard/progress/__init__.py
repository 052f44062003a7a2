"""Console output."""

from .reporter import ConsoleReporter, ProgressContext

__all__ = ["ConsoleReporter", "ProgressContext"]
