"""Webconsole status module - status sinks, console output and text helpers."""

from webconsole.status.console import console
from webconsole.status.formatting import (
    StatusFormatError,
    debugger_break,
    describe_exception,
    exception_type_name,
    format_message,
    html_sanitize,
)
from webconsole.status.progress import (
    ConsoleProgressStatus,
    ExceptionHook,
    MessageType,
    ProgressReporter,
    Sanitizer,
    SilentProgressStatus,
    StringProgressStatus,
    get_global_reporter,
    report_exception,
    report_progress,
    report_status,
    report_transient_status,
    set_global_reporter,
)

__all__ = [
    "ConsoleProgressStatus",
    "ExceptionHook",
    "MessageType",
    "ProgressReporter",
    "Sanitizer",
    "SilentProgressStatus",
    "StatusFormatError",
    "StringProgressStatus",
    "console",
    "debugger_break",
    "describe_exception",
    "exception_type_name",
    "format_message",
    "get_global_reporter",
    "html_sanitize",
    "report_exception",
    "report_progress",
    "report_status",
    "report_transient_status",
    "set_global_reporter",
]
