"""Reporters rendering engine events."""

from snowtree.reporters.base import Reporter
from snowtree.reporters.console import ConsoleReporter

__all__ = ["ConsoleReporter", "Reporter"]
