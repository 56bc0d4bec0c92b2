"""Exception types for rejected edits.

Every error here is recoverable: edit functions catch them, keep the prior
snapshot and surface the message through ``Building.last_error``.
"""

from __future__ import annotations


class OutlineError(ValueError):
    """Base class for all rejected operations."""


class GeometryError(OutlineError):
    """Polygon invariant violated (self-intersection, duplicates, <3 vertices)."""


class RangeError(OutlineError):
    """Numeric value out of range (non-positive length/height, negative offset...)."""


class NotFoundError(OutlineError):
    """Referenced floor, edge or template does not exist."""
