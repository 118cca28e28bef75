"""Webconsole - status and progress reporting for long-running operations."""

from webconsole.settings import StatusSettings
from webconsole.status import (
    ConsoleProgressStatus,
    MessageType,
    ProgressReporter,
    SilentProgressStatus,
    StatusFormatError,
    StringProgressStatus,
)

__all__ = [
    "ConsoleProgressStatus",
    "MessageType",
    "ProgressReporter",
    "SilentProgressStatus",
    "StatusFormatError",
    "StatusSettings",
    "StringProgressStatus",
]
