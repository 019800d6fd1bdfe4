"""
Roof Measurement Engine

Turns a validated set of roof planes into a Measurement: every plane is
recomputed from its boundary points, pitch-corrected and classified, totals
are summed, and each step is recorded in the session audit trail.

One engine instance serves exactly one measurement session. Concurrent
sessions need separate instances.
"""

import logging
import platform
import time
import uuid
from dataclasses import replace
from datetime import timedelta
from typing import Any, Dict, Optional, Sequence

from .. import __version__
from ..data_models import (
    AuditAction, ComplianceState, ComplianceStatus, EngineConfig,
    Measurement, Plane, ValidationResult, utc_now,
)
from ..exceptions import DegeneratePolygonError, InvalidInputError, InvalidMeasurementError
from ..geometry.correction import apply_pitch_correction, compute_quality_metrics
from ..geometry.polygon import polygon_area, polygon_perimeter
from ..utils.config_manager import ConfigManager
from ..validation.measurement_validator import MeasurementValidator
from ..validation.plane_validator import PlaneValidator
from .audit_trail import AuditTrail
from .material_classifier import HeuristicMaterialClassifier, MaterialClassifier


class RoofMeasurementEngine:
    """Multi-plane roof area calculation with pitch correction and audit trail."""

    def __init__(self,
                 engine_config: Optional[EngineConfig] = None,
                 config_manager: Optional[ConfigManager] = None,
                 material_classifier: Optional[MaterialClassifier] = None):
        """
        Initialize measurement engine.

        Args:
            engine_config: Engine configuration. If None, built from config_manager.
            config_manager: Configuration manager instance
            material_classifier: Material detection strategy. Defaults to the
                pitch/area heuristic.
        """
        self.config_manager = config_manager or ConfigManager()
        self.config = engine_config or self.config_manager.get_engine_config()
        self.logger = logging.getLogger(__name__)

        self.validator = PlaneValidator(self.config, self.config_manager)
        self.measurement_validator = MeasurementValidator(self.config_manager)
        self.material_classifier = material_classifier or HeuristicMaterialClassifier()
        self.audit_trail = AuditTrail()

        compliance = self.config_manager.get_compliance_params()
        self.compliance_standards = tuple(compliance.get('standards', ['ISO-25178', 'ASTM-E2738']))
        self.compliance_validity_days = int(compliance.get('validity_days', 30))

        self.logger.info(
            f"Measurement engine initialized: units={self.config.unit_system.value}, "
            f"pitch_correction={self.config.pitch_correction_method.value}, "
            f"precision={self.config.area_precision_digits}"
        )

    def validate_planes(self, planes: Sequence[Plane]) -> ValidationResult:
        """
        Pre-flight validation without committing to a computation.

        Args:
            planes: Candidate planes

        Returns:
            Validation report for the plane set
        """
        return self.validator.validate(planes)

    def compute(self, planes: Sequence[Plane], session_id: str, user_id: str) -> Measurement:
        """
        Calculate a complete roof measurement from detected planes.

        Args:
            planes: Detected roof planes; never mutated
            session_id: Measurement session identifier
            user_id: User performing the measurement

        Returns:
            Internally consistent Measurement

        Raises:
            InvalidInputError: If the plane set fails validation
            InvalidMeasurementError: If the finished measurement is inconsistent
        """
        start_time = time.perf_counter()

        try:
            validation = self.validator.validate(planes)
            if not validation.is_valid:
                raise InvalidInputError(validation.errors)

            self.audit_trail.record(AuditAction.CREATE, user_id, session_id,
                                    "Started roof measurement calculation")

            processed = [self.process_plane(plane) for plane in planes]

            total_area = self.round_to_precision(sum(p.area for p in processed))
            total_projected_area = self.round_to_precision(sum(p.projected_area for p in processed))

            elapsed = time.perf_counter() - start_time
            quality_metrics = compute_quality_metrics(processed, elapsed)

            now = utc_now()
            draft = Measurement(
                id=self._generate_measurement_id(),
                property_id=f"property_{session_id}",
                session_id=session_id,
                user_id=user_id,
                timestamp=now,
                planes=tuple(processed),
                total_area=total_area,
                total_projected_area=total_projected_area,
                accuracy=validation.quality_score / 100,
                quality_metrics=quality_metrics,
                audit_trail=self.audit_trail.snapshot(),
                compliance=ComplianceStatus(
                    status=ComplianceState.PENDING,
                    standards=self.compliance_standards,
                    last_check=now,
                    next_check=now + timedelta(days=self.compliance_validity_days),
                ),
                device_info=self._get_device_info(),
                validation=validation,
                metadata={
                    'calculation_method': self.config.pitch_correction_method.value,
                    'unit_system': self.config.unit_system.value,
                    'version': __version__,
                    'processing_time_s': round(elapsed, 6),
                },
            )

            final_validation = self.measurement_validator.validate(draft)
            if not final_validation.is_valid:
                raise InvalidMeasurementError(final_validation.errors)

            self.audit_trail.record(AuditAction.CREATE, user_id, session_id,
                                    "Completed roof measurement calculation")

            measurement = replace(
                draft,
                audit_trail=self.audit_trail.snapshot(),
                validation=ValidationResult(
                    is_valid=True,
                    errors=[],
                    warnings=validation.warnings + final_validation.warnings,
                    quality_score=validation.quality_score,
                    recommendations=validation.recommendations + final_validation.recommendations,
                ),
            )

            self.logger.info(
                f"Measurement {measurement.id} completed: {len(processed)} planes, "
                f"total area {total_area}, projected {total_projected_area}, "
                f"quality {validation.quality_score}"
            )
            return measurement

        except Exception as e:
            self.audit_trail.record(AuditAction.CREATE, user_id, session_id,
                                    f"Error in calculation: {e}")
            self.logger.error(f"Measurement failed for session {session_id}: {e}")
            raise

    def process_plane(self, plane: Plane) -> Plane:
        """
        Recompute a plane's derived fields.

        Args:
            plane: Caller-supplied plane

        Returns:
            New plane with recomputed area, perimeter, projected area and material

        Raises:
            DegeneratePolygonError: If the plane's geometry is invalid
        """
        if not self.validator.is_valid_geometry(plane):
            raise DegeneratePolygonError(plane.id, "insufficient boundary points or invalid shape")

        area = polygon_area(plane.boundaries)
        perimeter = polygon_perimeter(plane.boundaries)
        projected_area = apply_pitch_correction(area, plane.pitch_angle_deg,
                                                self.config.pitch_correction_method)

        recomputed = replace(
            plane,
            area=self.round_to_precision(area),
            perimeter=self.round_to_precision(perimeter),
            projected_area=self.round_to_precision(projected_area),
        )
        material = self.material_classifier.classify(recomputed)

        self.logger.debug(
            f"Plane {plane.id}: area={recomputed.area}, perimeter={recomputed.perimeter}, "
            f"projected={recomputed.projected_area}, material={material.value}"
        )
        return replace(recomputed, material=material)

    def log_action(self, action: AuditAction, user_id: str, session_id: str, description: str) -> None:
        """Record a caller-side operation (export, view, sync) in the session trail."""
        self.audit_trail.record(action, user_id, session_id, description)

    def round_to_precision(self, value: float) -> float:
        """Round a value to the configured area precision."""
        return round(value, self.config.area_precision_digits)

    def _generate_measurement_id(self) -> str:
        return f"measurement_{uuid.uuid4().hex}"

    def _get_device_info(self) -> Dict[str, Any]:
        """Host information recorded for audit purposes."""
        return {
            'platform': platform.system(),
            'platform_version': platform.release(),
            'machine': platform.machine(),
            'python_version': platform.python_version(),
            'engine_version': __version__,
        }
