"""
Pitch and Quality Correction

Slope correction models for plane areas and the weighted quality score used
to grade a plane set.
"""

import math
from typing import Sequence

import numpy as np

from ..data_models import Plane, PitchCorrectionMethod, QualityMetrics


def pitch_correction_factor(pitch_angle_deg: float,
                            method: PitchCorrectionMethod = PitchCorrectionMethod.ADVANCED) -> float:
    """
    Multiplier applied to a raw polygon area for the given pitch.

    Args:
        pitch_angle_deg: Plane tilt from horizontal in degrees
        method: Correction model to use

    Returns:
        Correction factor
    """
    pitch = math.radians(pitch_angle_deg)
    method = PitchCorrectionMethod(method)

    if method is PitchCorrectionMethod.TRIGONOMETRIC:
        return math.cos(pitch)

    if method is PitchCorrectionMethod.PROJECTION:
        return math.cos(pitch) * (1 + math.sin(pitch) * 0.1)

    return (math.cos(pitch) *
            (1 + math.sin(pitch) * 0.05) *
            (1 - math.sin(pitch) ** 2 * 0.02))


def round_half_up(value: float) -> int:
    """Round to the nearest integer with exact halves rounded up."""
    return int(math.floor(value + 0.5))


def apply_pitch_correction(area: float, pitch_angle_deg: float,
                           method: PitchCorrectionMethod = PitchCorrectionMethod.ADVANCED) -> float:
    """Return the pitch-corrected (``projected_area``) figure for a raw area."""
    return area * pitch_correction_factor(pitch_angle_deg, method)


def coefficient_of_variation(values: Sequence[float]) -> float:
    """Population standard deviation divided by the mean."""
    data = np.asarray(values, dtype=np.float64)
    mean = data.mean()
    if mean == 0:
        return math.inf
    return float(data.std() / mean)


def size_consistency(areas: Sequence[float]) -> float:
    """
    Score (0-100) for how similar plane areas are.

    Fewer than two planes count as perfectly consistent.
    """
    if len(areas) < 2:
        return 100.0
    cv = coefficient_of_variation(areas)
    if math.isinf(cv):
        return 0.0
    return max(0.0, 100.0 - cv * 50.0)


def quality_score(avg_confidence: float,
                  geometry_validity_ratio: float,
                  consistency: float,
                  has_errors: bool) -> int:
    """
    Weighted 0-100 quality score for a plane set.

    Args:
        avg_confidence: Mean plane confidence (0-1)
        geometry_validity_ratio: Fraction of planes with valid geometry (0-1)
        consistency: Size consistency score (0-100)
        has_errors: Whether any validation error was raised

    Returns:
        Rounded score clamped to 0-100
    """
    score = (avg_confidence * 40 +
             geometry_validity_ratio * 30 +
             (consistency / 100.0) * 20 +
             (0 if has_errors else 10))
    return min(100, max(0, round_half_up(score)))


def compute_quality_metrics(planes: Sequence[Plane], elapsed_s: float) -> QualityMetrics:
    """Derive session quality metrics from processed planes and wall-clock time."""
    if not planes:
        return QualityMetrics(0, 0, 0.0, round(elapsed_s, 3), 0, 0)

    avg_confidence = sum(p.confidence for p in planes) / len(planes)
    total_points = sum(len(p.boundaries) for p in planes)
    total_area = sum(p.area for p in planes)

    return QualityMetrics(
        overall_score=round_half_up(avg_confidence * 100),
        tracking_stability=round_half_up(min(100.0, avg_confidence * 120)),
        point_density=round(total_points / max(1.0, total_area), 1),
        duration_s=round(elapsed_s, 3),
        lighting_quality=round_half_up(min(100.0, avg_confidence * 110)),
        movement_smoothness=round_half_up(min(100.0, 80 + avg_confidence * 20)),
        tracking_interruptions=0,
    )
