"""
Geometry Module

Pure polygon measurements and pitch/quality correction.
"""

from .polygon import (
    polygon_area, polygon_perimeter, are_collinear, segments_intersect,
    self_intersects, convert_to_feet, square_meters_to_square_feet
)
from .correction import (
    apply_pitch_correction, pitch_correction_factor, size_consistency,
    quality_score, compute_quality_metrics, round_half_up
)

__all__ = [
    'polygon_area', 'polygon_perimeter', 'are_collinear', 'segments_intersect',
    'self_intersects', 'convert_to_feet', 'square_meters_to_square_feet',
    'apply_pitch_correction', 'pitch_correction_factor', 'size_consistency',
    'quality_score', 'compute_quality_metrics', 'round_half_up'
]
