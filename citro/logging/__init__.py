"""Markdown command logging."""

from citro.logging.command_logger import CommandLogger

__all__ = ["CommandLogger"]
