"""Status and progress reporting for long-running operations.

A producer talks to a ProgressReporter. The concrete reporter decides what
becomes of each report: StringProgressStatus keeps an HTML-encoded record in
memory, ConsoleProgressStatus draws to a terminal, SilentProgressStatus
drops everything.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from enum import Enum
from typing import Any

from rich.console import Console
from rich.markup import escape

from webconsole.settings.models import StatusSettings
from webconsole.status.formatting import (
    debugger_break,
    describe_exception,
    exception_type_name,
    format_message,
    html_sanitize,
)

logger = logging.getLogger(__name__)


class MessageType(str, Enum):
    """Severity of a reported status line."""

    INFO = "Info"
    WARNING = "Warning"
    ERROR = "Error"


# Type aliases for injected collaborators
Sanitizer = Callable[[str], str]
ExceptionHook = Callable[[BaseException], None]


class ProgressReporter(ABC):
    """Abstract base class for progress reporters."""

    @abstractmethod
    def report_status(
        self,
        message: str,
        *args: Any,
        message_type: MessageType = MessageType.INFO,
    ) -> None:
        """Report a permanent status line."""
        pass

    @abstractmethod
    def report_exception(self, exception: BaseException) -> None:
        """Report an exception and its cause chain."""
        pass

    @abstractmethod
    def report(self, percent: int) -> None:
        """Report completion percentage."""
        pass

    @abstractmethod
    def report_transient_status(self, message: str, *args: Any) -> None:
        """Report an ephemeral status line."""
        pass


class StringProgressStatus(ProgressReporter):
    """Reporter that captures status lines in memory for later display.

    Every line is prefixed with its severity and passed through ``sanitize``
    (HTML encoding by default) before it is stored. Error and warning lines
    are kept in their own buffers as well as the full output. Transient
    status is not captured.
    """

    def __init__(
        self,
        sanitize: Sanitizer = html_sanitize,
        on_exception: ExceptionHook | None = None,
        settings: StatusSettings | None = None,
    ) -> None:
        self.settings = settings or StatusSettings()
        self.sanitize = sanitize
        if on_exception is None and self.settings.break_on_exception:
            on_exception = debugger_break
        self.on_exception = on_exception

        self._output: list[str] = []
        self._errors: list[str] = []
        self._warnings: list[str] = []
        self._progress = 0

    def report_status(
        self,
        message: str,
        *args: Any,
        message_type: MessageType = MessageType.INFO,
    ) -> None:
        """Record a sanitized, severity-prefixed line."""
        line = self.sanitize(f"{message_type.value}: {format_message(message, args)}")

        self._output.append(line)
        if message_type == MessageType.ERROR:
            self._errors.append(line)
        elif message_type == MessageType.WARNING:
            self._warnings.append(line)

    def report_exception(self, exception: BaseException) -> None:
        """Record an exception and its cause chain as an error."""
        logger.debug("Capturing %s", exception_type_name(exception))
        text = describe_exception(
            exception, max_depth=self.settings.max_exception_depth
        )
        self.report_status(text, message_type=MessageType.ERROR)

        if self.on_exception is not None:
            self.on_exception(exception)

    def report(self, percent: int) -> None:
        """Store the latest percentage as given."""
        self._progress = percent

    def report_transient_status(self, message: str, *args: Any) -> None:
        """Transient status is not captured."""
        pass

    def _joined(self, lines: list[str]) -> str:
        newline = self.settings.newline
        return "".join(line + newline for line in lines)

    @property
    def output(self) -> str:
        """All captured output."""
        return self._joined(self._output)

    @property
    def errors(self) -> str:
        """Error lines only."""
        return self._joined(self._errors)

    @property
    def warnings(self) -> str:
        """Warning lines only."""
        return self._joined(self._warnings)

    @property
    def has_errors(self) -> bool:
        """Whether any error line was recorded."""
        return len(self._errors) > 0

    @property
    def has_warnings(self) -> bool:
        """Whether any warning line was recorded."""
        return len(self._warnings) > 0

    @property
    def progress(self) -> int:
        """Last reported percentage."""
        return self._progress


class ConsoleProgressStatus(ProgressReporter):
    """Rich console-based progress reporter."""

    def __init__(
        self,
        console: Console | None = None,
        settings: StatusSettings | None = None,
    ) -> None:
        if console is None:
            from webconsole.status.console import console
        self.console = console
        self.settings = settings or StatusSettings()
        self._styles = {
            MessageType.INFO: "status.info",
            MessageType.WARNING: "status.warn",
            MessageType.ERROR: "status.fail",
        }

    def report_status(
        self,
        message: str,
        *args: Any,
        message_type: MessageType = MessageType.INFO,
    ) -> None:
        """Print a styled status line to console."""
        text = escape(format_message(message, args))
        style = self._styles[message_type]
        self.console.print(f"[{style}]{message_type.value}:[/] {text}")

    def report_exception(self, exception: BaseException) -> None:
        """Print an exception block to console."""
        text = describe_exception(
            exception, max_depth=self.settings.max_exception_depth
        )
        self.report_status(text, message_type=MessageType.ERROR)

    def report(self, percent: int) -> None:
        """Draw a progress bar in place."""
        # Create progress bar; the bar is clamped, the label is not
        bar_width = 20
        filled = max(0, min(bar_width, int(bar_width * percent / 100)))
        bar = "█" * filled + "░" * (bar_width - filled)

        # Use carriage return for in-place updates
        self.console.print(f"  [status.progress][{bar}][/] {percent}%", end="\r")

    def report_transient_status(self, message: str, *args: Any) -> None:
        """Draw transient status in place."""
        text = escape(format_message(message, args))
        self.console.print(f"  [status.transient]{text}[/]", end="\r")


class SilentProgressStatus(ProgressReporter):
    """No-op progress reporter for quiet mode."""

    def report_status(
        self,
        message: str,
        *args: Any,
        message_type: MessageType = MessageType.INFO,
    ) -> None:
        pass

    def report_exception(self, exception: BaseException) -> None:
        pass

    def report(self, percent: int) -> None:
        pass

    def report_transient_status(self, message: str, *args: Any) -> None:
        pass


# Global progress reporter (can be set by the hosting application)
_global_reporter: ProgressReporter | None = None


def set_global_reporter(reporter: ProgressReporter | None) -> None:
    """Set the global progress reporter."""
    global _global_reporter
    _global_reporter = reporter


def get_global_reporter() -> ProgressReporter:
    """Get the global progress reporter (silent if not set)."""
    if _global_reporter is None:
        return SilentProgressStatus()
    return _global_reporter


def report_status(
    message: str,
    *args: Any,
    message_type: MessageType = MessageType.INFO,
) -> None:
    """Convenience function to report status using global reporter."""
    get_global_reporter().report_status(message, *args, message_type=message_type)


def report_exception(exception: BaseException) -> None:
    """Convenience function to report an exception using global reporter."""
    get_global_reporter().report_exception(exception)


def report_progress(percent: int) -> None:
    """Convenience function to report percentage using global reporter."""
    get_global_reporter().report(percent)


def report_transient_status(message: str, *args: Any) -> None:
    """Convenience function to report transient status using global reporter."""
    get_global_reporter().report_transient_status(message, *args)
