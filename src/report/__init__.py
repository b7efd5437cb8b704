"""Repository report package: configuration, rendering and the run entry point."""

from .runner import build_report, main

__all__ = ["build_report", "main"]
