"""
Exception Hierarchy for the Roof Measurement Engine

Geometry errors describe a single bad polygon; engine errors describe a
rejected plane set or an inconsistent finished measurement.
"""

from typing import List, Optional


class RoofMeasurementError(Exception):
    """Base class for all roof measurement errors."""


class GeometryError(RoofMeasurementError):
    """Raised when boundary points cannot form a usable polygon."""


class InsufficientPointsError(GeometryError):
    """Raised when a polygon has fewer than three boundary points."""

    def __init__(self, point_count: int, required: int = 3):
        self.point_count = point_count
        self.required = required
        super().__init__(
            f"Polygon requires at least {required} boundary points, got {point_count}"
        )


class DegeneratePolygonError(GeometryError):
    """Raised when a polygon is collinear, self-intersecting or has no area."""

    def __init__(self, plane_id: str, reason: str):
        self.plane_id = plane_id
        self.reason = reason
        super().__init__(f"Invalid geometry for plane {plane_id}: {reason}")


class EngineError(RoofMeasurementError):
    """Base class for errors raised by the measurement engine."""

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        self.errors = list(errors or [])
        super().__init__(message)


class InvalidInputError(EngineError):
    """Raised when the plane validator rejects the submitted plane set."""

    def __init__(self, errors: List[str]):
        super().__init__(f"Invalid planes: {', '.join(errors)}", errors)


class InvalidMeasurementError(EngineError):
    """Raised when a finished measurement fails its consistency check."""

    def __init__(self, errors: List[str]):
        super().__init__(f"Invalid measurement: {', '.join(errors)}", errors)
