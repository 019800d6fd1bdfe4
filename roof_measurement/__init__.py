"""
Roof Measurement Engine

Geometry and estimation engine for roof surveys: turns captured 3D boundary
polygons into validated area figures, a quality score, a material
bill-of-quantities and a tamper-evident audit log.

This package implements:
- Shoelace area, 3D perimeter and self-intersection checks over roof planes
- Pitch correction models and weighted quality scoring
- Plane-set validation with errors, warnings and recommendations
- Multi-plane measurement aggregation with a SHA-256 audit trail
- Waste- and complexity-adjusted material and cost estimation
- JSON, CSV and text report export
"""

__version__ = "1.0.0"
__author__ = "Roof Measurement Team"

from .exceptions import (
    RoofMeasurementError, GeometryError, InsufficientPointsError,
    DegeneratePolygonError, EngineError, InvalidInputError, InvalidMeasurementError
)
from .data_models import (
    Point3, Vector3, Plane, Measurement, QualityMetrics, ValidationResult,
    AuditEntry, ComplianceStatus, MaterialCalculation, CostEstimate, EngineConfig,
    SensorAccuracy, SurfaceType, MaterialType, AuditAction, UnitSystem,
    PitchCorrectionMethod, ComplianceState, ExportFormat
)
from .validation import PlaneValidator, MeasurementValidator
from .measurement import RoofMeasurementEngine, AuditTrail, HeuristicMaterialClassifier
from .estimation import MaterialEstimator, RateTablePricing
from .export import MeasurementExporter, parse_json
from .utils import ConfigManager

__all__ = [
    # Errors
    'RoofMeasurementError', 'GeometryError', 'InsufficientPointsError',
    'DegeneratePolygonError', 'EngineError', 'InvalidInputError', 'InvalidMeasurementError',
    # Data Models
    'Point3', 'Vector3', 'Plane', 'Measurement', 'QualityMetrics', 'ValidationResult',
    'AuditEntry', 'ComplianceStatus', 'MaterialCalculation', 'CostEstimate', 'EngineConfig',
    'SensorAccuracy', 'SurfaceType', 'MaterialType', 'AuditAction', 'UnitSystem',
    'PitchCorrectionMethod', 'ComplianceState', 'ExportFormat',
    # Engine
    'PlaneValidator', 'MeasurementValidator', 'RoofMeasurementEngine', 'AuditTrail',
    'HeuristicMaterialClassifier', 'MaterialEstimator', 'RateTablePricing',
    'MeasurementExporter', 'parse_json', 'ConfigManager'
]
