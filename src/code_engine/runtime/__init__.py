"""Telemetry and timer plumbing shared by every engine component."""

from . import telemetry
from .scheduler import DebounceScheduler

__all__ = ["DebounceScheduler", "telemetry"]
