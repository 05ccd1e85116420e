# volley_core/errors.py
from __future__ import annotations


class RotationError(Exception):
    """Base class for fatal conditions that stop a validation run."""


class DocumentError(RotationError, ValueError):
    """Rotation file is missing, unreadable, malformed or off-schema."""


class LineupError(RotationError, ValueError):
    """Lineup cannot be parsed, checked against the roster, or auto-detected."""


class EditorError(RotationError, ValueError):
    """An edit was refused (duplicate id, last phase, empty copy source, ...)."""
