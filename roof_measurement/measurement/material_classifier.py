"""
Material Classification

Guesses the roofing material of a processed plane. The pitch/area heuristic
stands in for an image-based classifier; any object with a compatible
``classify`` method can be handed to the engine instead.
"""

from typing import Protocol

from ..data_models import MaterialType, Plane


class MaterialClassifier(Protocol):
    """Strategy interface for material detection."""

    def classify(self, plane: Plane) -> MaterialType:
        ...


class HeuristicMaterialClassifier:
    """Rule-of-thumb classifier based on pitch and recomputed area."""

    def __init__(self,
                 flat_pitch_deg: float = 5.0,
                 steep_pitch_deg: float = 45.0,
                 large_area_m2: float = 100.0):
        self.flat_pitch_deg = flat_pitch_deg
        self.steep_pitch_deg = steep_pitch_deg
        self.large_area_m2 = large_area_m2

    def classify(self, plane: Plane) -> MaterialType:
        """
        Classify a plane whose ``area`` has already been recomputed.

        Low pitch means flat roofing, steep pitch means shingle and large
        planes are assumed to be metal; otherwise the existing material is kept.
        """
        if plane.pitch_angle_deg < self.flat_pitch_deg:
            return MaterialType.FLAT
        if plane.pitch_angle_deg > self.steep_pitch_deg:
            return MaterialType.SHINGLE
        if plane.area > self.large_area_m2:
            return MaterialType.METAL
        return plane.material or MaterialType.UNKNOWN
