"""Text helpers shared by the status reporters.

Covers positional message templating, HTML encoding of captured lines,
and flattening an exception and its chained causes into a readable block.
"""

import html
import logging
import string
import sys
import traceback
from collections.abc import Sequence
from typing import Any

from webconsole.settings.models import DEFAULT_MAX_EXCEPTION_DEPTH

logger = logging.getLogger(__name__)

NO_STACK_TRACE = "No stack trace available."
INNER_EXCEPTION_HEADER = "INNER EXCEPTION"


class StatusFormatError(ValueError):
    """Raised when format arguments do not match a message template."""

    pass


class _StrictFormatter(string.Formatter):
    """Formatter that rejects arguments no placeholder consumed."""

    def check_unused_args(self, used_args, args, kwargs):
        unused = [i for i in range(len(args)) if i not in used_args]
        if unused:
            raise StatusFormatError(
                f"{len(unused)} format argument(s) not used by template "
                f"(positions {unused})"
            )


_formatter = _StrictFormatter()


def format_message(template: str, args: Sequence[Any] = ()) -> str:
    """Substitute positional arguments into a message template.

    Stricter than plain ``str.format``, which ignores surplus positional
    arguments: any argument no placeholder consumes raises instead.

    Args:
        template: Message using ``str.format`` placeholders (``{0}``, ``{}``).
        args: Positional values. When empty the template is returned verbatim,
            so literal braces need no escaping.

    Returns:
        The formatted message.

    Raises:
        StatusFormatError: If a placeholder has no matching argument, names a
            keyword field, has invalid syntax or spec, or if an argument is
            left unused.
    """
    if not args:
        return template

    try:
        return _formatter.vformat(template, tuple(args), {})
    except StatusFormatError:
        raise
    except (IndexError, KeyError, ValueError, AttributeError, TypeError) as e:
        raise StatusFormatError(
            f"Cannot format {template!r} with {len(args)} argument(s): {e}"
        ) from e


def html_sanitize(text: str) -> str:
    """Escape ``& < > " '`` so text can be embedded in HTML."""
    return html.escape(text, quote=True)


def exception_type_name(exception: BaseException) -> str:
    """Module-qualified class name; builtins are left bare."""
    cls = type(exception)
    if cls.__module__ == "builtins":
        return cls.__qualname__
    return f"{cls.__module__}.{cls.__qualname__}"


def _trace_text(exception: BaseException) -> str:
    if exception.__traceback__ is None:
        return NO_STACK_TRACE
    trace = "".join(traceback.format_tb(exception.__traceback__)).strip()
    return trace or NO_STACK_TRACE


def _next_cause(exception: BaseException) -> BaseException | None:
    if exception.__cause__ is not None:
        return exception.__cause__
    if exception.__suppress_context__:
        return None
    return exception.__context__


def describe_exception(
    exception: BaseException,
    max_depth: int = DEFAULT_MAX_EXCEPTION_DEPTH,
) -> str:
    """Render an exception and its cause chain as multi-line text.

    The chain is walked outermost to innermost, following ``__cause__`` and
    then the implicit ``__context__``. The walk stops with a marker line if
    a cause repeats or more than ``max_depth`` inner exceptions are seen.

    Example:
        >>> print(describe_exception(ValueError("bad")))
        ERROR: bad (ValueError)
        No stack trace available.
    """
    lines = [
        f"ERROR: {exception} ({exception_type_name(exception)})",
        _trace_text(exception),
    ]

    seen = {id(exception)}
    depth = 0
    inner = _next_cause(exception)
    while inner is not None:
        if id(inner) in seen:
            logger.warning(
                "Cyclic cause chain under %s, truncating report",
                exception_type_name(exception),
            )
            lines.append(f"{INNER_EXCEPTION_HEADER} CHAIN TRUNCATED (cycle detected)")
            break
        if depth >= max_depth:
            logger.warning(
                "Cause chain under %s deeper than %d, truncating report",
                exception_type_name(exception),
                max_depth,
            )
            lines.append(
                f"{INNER_EXCEPTION_HEADER} CHAIN TRUNCATED "
                f"(depth limit of {max_depth} reached)"
            )
            break

        seen.add(id(inner))
        depth += 1
        lines.append(INNER_EXCEPTION_HEADER)
        lines.append(f"{inner} ({exception_type_name(inner)})")
        lines.append(_trace_text(inner))
        inner = _next_cause(inner)

    return "\n".join(lines)


def debugger_break(exception: BaseException) -> None:
    """Drop into the debugger if one is tracing this thread."""
    if sys.gettrace() is None:
        return
    logger.debug("Breaking into debugger for %s", exception_type_name(exception))
    breakpoint()
