"""Pytest configuration and shared fixtures."""

import pytest


@pytest.fixture(autouse=True)
def _reset_global_reporter():
    """Clear the process-wide reporter between tests.

    Tests that install a reporter would otherwise leak it into
    every test that runs after them.
    """
    from webconsole.status.progress import set_global_reporter

    set_global_reporter(None)
    yield
    set_global_reporter(None)
