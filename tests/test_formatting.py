"""Tests for status text helpers."""

import sys

import pytest

from webconsole.status.formatting import (
    NO_STACK_TRACE,
    StatusFormatError,
    debugger_break,
    describe_exception,
    exception_type_name,
    format_message,
    html_sanitize,
)


class CustomError(Exception):
    pass


class TestFormatMessage:
    """Tests for format_message."""

    def test_positional(self):
        assert format_message("Loaded {0} items", [42]) == "Loaded 42 items"

    def test_auto_numbered(self):
        assert format_message("{} and {}", ("a", "b")) == "a and b"

    def test_format_spec(self):
        assert format_message("[{0:>3}]", (7,)) == "[  7]"

    def test_repeated_placeholder(self):
        """Should allow one argument to fill several placeholders."""
        assert format_message("{0}-{0}", (1,)) == "1-1"

    def test_empty_args_returns_template(self):
        """Should not parse the template when there are no args."""
        assert format_message("{not a field", ()) == "{not a field"

    @pytest.mark.parametrize(
        "template, args",
        [
            ("{0} {1}", (1,)),  # missing index
            ("{name}", (1,)),  # keyword field
            ("{0:d}", ("x",)),  # bad spec for type
            ("{0", (1,)),  # unbalanced brace
            ("{0}", (1, 2)),  # unused argument
            ("static", (1,)),  # no placeholders at all
        ],
    )
    def test_mismatch_raises(self, template, args):
        """Should raise StatusFormatError on any template/args mismatch."""
        with pytest.raises(StatusFormatError):
            format_message(template, args)

    def test_error_is_value_error(self):
        """StatusFormatError should be catchable as ValueError."""
        with pytest.raises(ValueError):
            format_message("{0} {1}", (1,))

    def test_error_is_chained(self):
        """Should keep the underlying formatting error as the cause."""
        with pytest.raises(StatusFormatError) as exc_info:
            format_message("{0} {1}", (1,))
        assert isinstance(exc_info.value.__cause__, IndexError)


class TestHtmlSanitize:
    """Tests for html_sanitize."""

    def test_escapes_markup_characters(self):
        assert html_sanitize("& < > \" '") == "&amp; &lt; &gt; &quot; &#x27;"

    def test_plain_text_unchanged(self):
        assert html_sanitize("Loaded 42 items") == "Loaded 42 items"


class TestExceptionTypeName:
    """Tests for exception_type_name."""

    def test_builtin_is_bare(self):
        assert exception_type_name(ValueError()) == "ValueError"

    def test_custom_is_qualified(self):
        name = exception_type_name(CustomError())
        assert name.endswith(".CustomError")
        assert name != "CustomError"


class TestDescribeException:
    """Tests for describe_exception."""

    def test_without_trace_or_cause(self):
        assert describe_exception(ValueError("bad")) == (
            "ERROR: bad (ValueError)\n" + NO_STACK_TRACE
        )

    def test_explicit_cause_with_traces(self):
        """Should render both exceptions with their tracebacks."""
        try:
            try:
                raise ValueError("inner")
            except ValueError as e:
                raise RuntimeError("outer") from e
        except RuntimeError as e:
            text = describe_exception(e)

        lines = text.splitlines()
        assert lines[0] == "ERROR: outer (RuntimeError)"
        assert "INNER EXCEPTION" in lines
        assert "inner (ValueError)" in lines
        assert NO_STACK_TRACE not in text
        assert "test_explicit_cause_with_traces" in text

    def test_implicit_context_followed(self):
        """Should follow __context__ when no explicit cause is set."""
        try:
            try:
                raise ValueError("inner")
            except ValueError:
                raise RuntimeError("outer")
        except RuntimeError as e:
            text = describe_exception(e)

        assert "inner (ValueError)" in text

    def test_suppressed_context_ignored(self):
        """Should stop at 'raise ... from None'."""
        try:
            try:
                raise ValueError("inner")
            except ValueError:
                raise RuntimeError("outer") from None
        except RuntimeError as e:
            text = describe_exception(e)

        assert "INNER EXCEPTION" not in text

    def test_self_cycle(self):
        """Should flag an exception that is its own cause."""
        err = ValueError("loop")
        err.__cause__ = err

        text = describe_exception(err)

        assert text.splitlines()[-1] == "INNER EXCEPTION CHAIN TRUNCATED (cycle detected)"

    def test_cycle_logs_warning(self, caplog):
        """Should log a warning when truncating a cycle."""
        a = ValueError("a")
        b = ValueError("b")
        a.__cause__ = b
        b.__cause__ = a

        with caplog.at_level("WARNING", logger="webconsole.status.formatting"):
            describe_exception(a)

        assert "Cyclic cause chain" in caplog.text

    def test_depth_limit(self):
        """Should render at most max_depth inner exceptions."""
        err = ValueError("level 0")
        current = err
        for i in range(1, 6):
            current.__cause__ = ValueError(f"level {i}")
            current = current.__cause__

        lines = describe_exception(err, max_depth=2).splitlines()

        assert lines.count("INNER EXCEPTION") == 2
        assert "level 2 (ValueError)" in lines
        assert "level 3 (ValueError)" not in lines
        assert lines[-1] == "INNER EXCEPTION CHAIN TRUNCATED (depth limit of 2 reached)"

    def test_chain_at_exact_depth_not_flagged(self):
        """Should not flag a chain that fits the limit."""
        err = ValueError("top")
        err.__cause__ = ValueError("bottom")

        text = describe_exception(err, max_depth=1)

        assert "TRUNCATED" not in text


class TestDebuggerBreak:
    """Tests for debugger_break."""

    def test_no_break_without_tracer(self, monkeypatch):
        """Should not break when no debugger is tracing."""
        calls = []
        monkeypatch.setattr(sys, "gettrace", lambda: None)
        monkeypatch.setattr("builtins.breakpoint", lambda: calls.append(True))

        debugger_break(ValueError("bad"))

        assert calls == []

    def test_breaks_with_tracer(self, monkeypatch):
        """Should call breakpoint() when a tracer is active."""
        calls = []
        monkeypatch.setattr(sys, "gettrace", lambda: object())
        monkeypatch.setattr("builtins.breakpoint", lambda: calls.append(True))

        debugger_break(ValueError("bad"))

        assert calls == [True]
