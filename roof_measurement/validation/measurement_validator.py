"""
Measurement Consistency Validator

Coarse post-hoc check over a finished measurement. Failures here point at an
internal inconsistency rather than bad input.
"""

import logging
from typing import Optional

from ..data_models import ComplianceState, Measurement, ValidationResult
from ..utils.config_manager import ConfigManager


class MeasurementValidator:
    """Checks totals, accuracy and advisory properties of a measurement."""

    def __init__(self, config_manager: Optional[ConfigManager] = None):
        self.config = config_manager or ConfigManager()
        self.logger = logging.getLogger(__name__)

        val = self.config.get_validation_params()
        self.min_accuracy = float(val.get('min_accuracy', 0.3))
        self.low_accuracy = float(val.get('low_accuracy', 0.7))
        self.min_tracking_stability = float(val.get('min_tracking_stability', 50))
        self.max_area_divergence = float(val.get('max_area_divergence', 0.5))

    def validate(self, measurement: Measurement) -> ValidationResult:
        """
        Validate a complete measurement.

        Args:
            measurement: Measurement to check

        Returns:
            Validation report with ``quality_score`` derived from accuracy
        """
        errors = []
        warnings = []
        recommendations = []

        if measurement.total_area <= 0:
            errors.append("Total area must be positive")
        if measurement.total_projected_area <= 0:
            errors.append("Total projected area must be positive")

        plane_sum = sum(p.area for p in measurement.planes)
        if abs(plane_sum - measurement.total_area) > 1e-6 * max(1.0, abs(plane_sum)):
            errors.append(
                f"Total area {measurement.total_area} does not match plane sum {plane_sum}"
            )
        projected_sum = sum(p.projected_area for p in measurement.planes)
        if abs(projected_sum - measurement.total_projected_area) > 1e-6 * max(1.0, abs(projected_sum)):
            errors.append(
                f"Total projected area {measurement.total_projected_area} "
                f"does not match plane sum {projected_sum}"
            )

        if measurement.accuracy < self.min_accuracy:
            errors.append("Measurement accuracy too low for reliable results")
        elif measurement.accuracy < self.low_accuracy:
            warnings.append("Low measurement accuracy - results may be imprecise")

        if measurement.total_area > 0:
            divergence = abs(measurement.total_area - measurement.total_projected_area) / measurement.total_area
            if divergence > self.max_area_divergence:
                warnings.append(
                    "Large discrepancy between actual and projected areas - verify pitch calculations"
                )

        if measurement.compliance.status is ComplianceState.NON_COMPLIANT:
            warnings.append("Measurement does not meet compliance standards")

        if measurement.quality_metrics.tracking_stability < self.min_tracking_stability:
            warnings.append("Poor tracking stability detected during measurement")

        if measurement.planes:
            avg_pitch = sum(p.pitch_angle_deg for p in measurement.planes) / len(measurement.planes)
            if avg_pitch > 45:
                recommendations.append(
                    "High-pitch roof detected - consider additional safety measures during installation"
                )

        if len({p.material for p in measurement.planes}) > 1:
            recommendations.append(
                "Multiple roof materials detected - plan material transitions carefully"
            )

        for warning in warnings:
            self.logger.warning(f"Measurement {measurement.id}: {warning}")

        return ValidationResult(
            is_valid=not errors,
            errors=errors,
            warnings=warnings,
            quality_score=round(measurement.accuracy * 100),
            recommendations=recommendations,
        )
