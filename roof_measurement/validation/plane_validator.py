"""
Roof Plane Validator

Gates a plane set before measurement: rejects planes with unusable geometry
or critically low confidence and reports advisory warnings and
recommendations alongside a weighted quality score.
"""

import logging
from typing import List, Optional, Sequence

from ..data_models import EngineConfig, Plane, ValidationResult
from ..geometry.correction import quality_score, size_consistency
from ..geometry.polygon import are_collinear, polygon_area, self_intersects
from ..utils.config_manager import ConfigManager

INVALID_GEOMETRY_MESSAGE = (
    "Invalid geometry for plane {plane_id}: insufficient boundary points or invalid shape"
)


class PlaneValidator:
    """Validates roof planes against geometric and confidence requirements."""

    def __init__(self,
                 engine_config: Optional[EngineConfig] = None,
                 config_manager: Optional[ConfigManager] = None):
        """
        Initialize plane validator.

        Args:
            engine_config: Engine configuration. If None, built from config_manager.
            config_manager: Configuration manager instance
        """
        self.config = config_manager or ConfigManager()
        self.engine_config = engine_config or self.config.get_engine_config()
        self.logger = logging.getLogger(__name__)

        val = self.config.get_validation_params()
        self.critical_confidence = float(val.get('critical_confidence', 0.3))
        self.warning_confidence = float(val.get('warning_confidence', 0.6))
        self.min_plane_area = float(val.get('min_plane_area', 0.5))
        self.max_plane_area = float(val.get('max_plane_area', 2000.0))
        self.steep_pitch_deg = float(val.get('steep_pitch_deg', 60.0))
        self.flat_pitch_deg = float(val.get('flat_pitch_deg', 2.0))
        self.min_dense_points = int(val.get('min_dense_points', 4))
        self.normal_tolerance = float(val.get('normal_tolerance', 0.1))

        self.logger.debug(
            f"Plane validator initialized: geometry_validation="
            f"{self.engine_config.geometry_validation_enabled}"
        )

    def is_valid_geometry(self, plane: Plane) -> bool:
        """
        Check whether a plane's boundary forms a usable polygon.

        The three-point minimum always applies. Shape checks (collinearity,
        self-intersection, unit normal, positive area) only run when geometry
        validation is enabled.
        """
        boundaries = plane.boundaries
        if len(boundaries) < 3:
            return False

        if not self.engine_config.geometry_validation_enabled:
            return True

        if len(boundaries) == 3:
            return not are_collinear(boundaries[0], boundaries[1], boundaries[2])

        if self_intersects(boundaries):
            return False

        if polygon_area(boundaries) <= 0:
            return False

        magnitude = plane.normal.magnitude()
        if abs(magnitude - 1.0) > self.normal_tolerance:
            return False

        return True

    def _range_errors(self, plane: Plane) -> List[str]:
        """Errors for confidence or pitch values outside their physical range."""
        errors = []
        if not 0.0 <= plane.confidence <= 1.0:
            errors.append(
                f"Confidence for plane {plane.id} outside 0-1: {plane.confidence:.2f}"
            )
        if not 0.0 <= plane.pitch_angle_deg <= 90.0:
            errors.append(
                f"Pitch for plane {plane.id} outside 0-90°: {plane.pitch_angle_deg:.1f}°"
            )
        return errors

    def validate(self, planes: Sequence[Plane]) -> ValidationResult:
        """
        Validate a plane set.

        Args:
            planes: Planes to validate

        Returns:
            Validation report; ``is_valid`` is True when no errors were found
        """
        errors: List[str] = []
        warnings: List[str] = []
        recommendations: List[str] = []

        if not planes:
            errors.append("No planes detected")
            self.logger.warning("Validation rejected an empty plane set")
            return ValidationResult(
                is_valid=False,
                errors=errors,
                warnings=warnings,
                quality_score=0,
                recommendations=["Ensure proper lighting and stable device movement"],
            )

        total_confidence = 0.0
        valid_geometry_count = 0
        areas: List[float] = []

        for plane in planes:
            geometry_ok = self.is_valid_geometry(plane)
            if geometry_ok:
                valid_geometry_count += 1
            else:
                errors.append(INVALID_GEOMETRY_MESSAGE.format(plane_id=plane.id))

            errors.extend(self._range_errors(plane))
            if not 0.0 <= plane.azimuth_deg < 360.0:
                warnings.append(
                    f"Azimuth for plane {plane.id} outside 0-360°: {plane.azimuth_deg:.1f}°"
                )

            if plane.confidence < self.critical_confidence:
                errors.append(
                    f"Critically low confidence for plane {plane.id}: {plane.confidence * 100:.1f}%"
                )
            elif plane.confidence < self.warning_confidence:
                warnings.append(
                    f"Low confidence for plane {plane.id}: {plane.confidence * 100:.1f}%"
                )
            total_confidence += min(1.0, max(0.0, plane.confidence))

            area = polygon_area(plane.boundaries) if len(plane.boundaries) >= 3 else 0.0
            areas.append(area)

            if geometry_ok:
                if area < self.min_plane_area:
                    warnings.append(
                        f"Very small plane {plane.id}: {area:.2f} sq m - may be measurement noise"
                    )
                elif area > self.max_plane_area:
                    warnings.append(
                        f"Unusually large plane {plane.id}: {area:.2f} sq m - verify accuracy"
                    )

            if plane.pitch_angle_deg > self.steep_pitch_deg:
                recommendations.append(
                    f"Steep roof detected ({plane.pitch_angle_deg:.1f}°) - consider safety measures"
                )
            elif plane.pitch_angle_deg < self.flat_pitch_deg:
                recommendations.append(
                    f"Nearly flat roof detected ({plane.pitch_angle_deg:.1f}°) - "
                    f"verify drainage requirements"
                )

            if len(plane.boundaries) < self.min_dense_points:
                warnings.append(
                    f"Low boundary point density for plane {plane.id} - may affect accuracy"
                )

        avg_confidence = total_confidence / len(planes)
        score = quality_score(
            avg_confidence=avg_confidence,
            geometry_validity_ratio=valid_geometry_count / len(planes),
            consistency=size_consistency(areas),
            has_errors=bool(errors),
        )

        if score < self.engine_config.quality_threshold:
            recommendations.append(
                "Consider remeasuring with better lighting and more stable movement"
            )
        if avg_confidence < 0.7:
            recommendations.append("Move closer to the roof surface for better accuracy")

        self.logger.debug(
            f"Validated {len(planes)} planes: {len(errors)} errors, "
            f"{len(warnings)} warnings, quality score {score}"
        )

        return ValidationResult(
            is_valid=not errors,
            errors=errors,
            warnings=warnings,
            quality_score=score,
            recommendations=recommendations,
        )
