"""
Polygon Geometry Kernel

Pure functions over ordered boundary points. Areas and planar predicates use
the x/y projection of the points; perimeters use full 3D distances.
"""

from typing import Sequence

import numpy as np

from ..data_models import Point3
from ..exceptions import InsufficientPointsError

EPSILON = 1e-6
METERS_TO_FEET = 3.28084
SQUARE_METERS_TO_SQUARE_FEET = 10.764


def _xy(points: Sequence[Point3]) -> np.ndarray:
    return np.array([[p.x, p.y] for p in points], dtype=np.float64)


def _xyz(points: Sequence[Point3]) -> np.ndarray:
    return np.array([[p.x, p.y, p.z] for p in points], dtype=np.float64)


def polygon_area(points: Sequence[Point3]) -> float:
    """
    Shoelace area of the polygon's x/y projection.

    Args:
        points: Ordered boundary points, either winding direction

    Returns:
        Absolute polygon area

    Raises:
        InsufficientPointsError: If fewer than 3 points are given
    """
    if len(points) < 3:
        raise InsufficientPointsError(len(points))

    coords = _xy(points)
    x, y = coords[:, 0], coords[:, 1]
    signed = np.dot(x, np.roll(y, -1)) - np.dot(np.roll(x, -1), y)
    return float(abs(signed) / 2.0)


def polygon_perimeter(points: Sequence[Point3]) -> float:
    """
    Sum of 3D edge lengths, wrapping from the last point back to the first.

    Raises:
        InsufficientPointsError: If fewer than 3 points are given
    """
    if len(points) < 3:
        raise InsufficientPointsError(len(points))

    coords = _xyz(points)
    edges = np.roll(coords, -1, axis=0) - coords
    return float(np.linalg.norm(edges, axis=1).sum())


def are_collinear(p1: Point3, p2: Point3, p3: Point3, epsilon: float = EPSILON) -> bool:
    """2D cross-product test for three points lying on one line."""
    cross = (p2.x - p1.x) * (p3.y - p1.y) - (p2.y - p1.y) * (p3.x - p1.x)
    return abs(cross) < epsilon


def _orientation(p: Point3, q: Point3, r: Point3) -> int:
    # 0 collinear, 1 clockwise, 2 counter-clockwise
    val = (q.y - p.y) * (r.x - q.x) - (q.x - p.x) * (r.y - q.y)
    if abs(val) < EPSILON:
        return 0
    return 1 if val > 0 else 2


def _on_segment(p: Point3, q: Point3, r: Point3) -> bool:
    """Whether q lies within the bounding box of segment p-r."""
    return (min(p.x, r.x) <= q.x <= max(p.x, r.x) and
            min(p.y, r.y) <= q.y <= max(p.y, r.y))


def segments_intersect(p1: Point3, q1: Point3, p2: Point3, q2: Point3) -> bool:
    """
    Test whether segments p1-q1 and p2-q2 intersect.

    Collinear overlap and touching endpoints count as intersections.
    """
    o1 = _orientation(p1, q1, p2)
    o2 = _orientation(p1, q1, q2)
    o3 = _orientation(p2, q2, p1)
    o4 = _orientation(p2, q2, q1)

    if o1 != o2 and o3 != o4:
        return True

    if o1 == 0 and _on_segment(p1, p2, q1):
        return True
    if o2 == 0 and _on_segment(p1, q2, q1):
        return True
    if o3 == 0 and _on_segment(p2, p1, q2):
        return True
    if o4 == 0 and _on_segment(p2, q1, q2):
        return True

    return False


def self_intersects(points: Sequence[Point3]) -> bool:
    """
    Check every pair of non-adjacent edges for an intersection.

    Triangles cannot self-intersect and always return False. The check is
    O(n^2) in the number of boundary points.
    """
    n = len(points)
    if n < 4:
        return False

    for i in range(n):
        a_start, a_end = points[i], points[(i + 1) % n]
        for j in range(i + 2, n):
            # first and last edges share a vertex
            if i == 0 and j == n - 1:
                continue
            b_start, b_end = points[j], points[(j + 1) % n]
            if segments_intersect(a_start, a_end, b_start, b_end):
                return True

    return False


def convert_to_feet(length_m: float) -> float:
    """Convert a length in meters to feet."""
    return length_m * METERS_TO_FEET


def square_meters_to_square_feet(area_m2: float) -> float:
    """Convert an area in square meters to square feet."""
    return area_m2 * SQUARE_METERS_TO_SQUARE_FEET
