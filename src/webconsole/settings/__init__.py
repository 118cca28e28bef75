"""Configuration for webconsole status reporters."""

from webconsole.settings.models import DEFAULT_MAX_EXCEPTION_DEPTH, StatusSettings

__all__ = [
    "DEFAULT_MAX_EXCEPTION_DEPTH",
    "StatusSettings",
]
