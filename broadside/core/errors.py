"""Targeting contract errors."""

from __future__ import annotations


class TargetingError(ValueError):
    """Raised when a caller or board collaborator breaks the engine contract."""
