"""
Data Models for the Roof Measurement Engine

Defines all data structures used throughout the system, together with
their conversion to and from plain dictionaries for export and parsing.
"""

import math
from dataclasses import dataclass, field, fields, is_dataclass, replace
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


class SensorAccuracy(str, Enum):
    """Sensor accuracy reported at point capture time."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class SurfaceType(str, Enum):
    """Roof plane classification."""
    PRIMARY = "primary"
    SECONDARY = "secondary"
    DORMER = "dormer"
    CHIMNEY = "chimney"
    HIP = "hip"
    OTHER = "other"


class MaterialType(str, Enum):
    """Roofing material covering a plane."""
    SHINGLE = "shingle"
    METAL = "metal"
    TILE = "tile"
    FLAT = "flat"
    UNKNOWN = "unknown"


class AuditAction(str, Enum):
    """Operations recorded in the audit trail."""
    CREATE = "create"
    MODIFY = "modify"
    EXPORT = "export"
    SYNC = "sync"
    VIEW = "view"
    DELETE = "delete"


class UnitSystem(str, Enum):
    METRIC = "metric"
    IMPERIAL = "imperial"


class PitchCorrectionMethod(str, Enum):
    TRIGONOMETRIC = "trigonometric"
    PROJECTION = "projection"
    ADVANCED = "advanced"


class ComplianceState(str, Enum):
    COMPLIANT = "compliant"
    NON_COMPLIANT = "non-compliant"
    PENDING = "pending"
    UNKNOWN = "unknown"


class ExportFormat(str, Enum):
    JSON = "json"
    CSV = "csv"
    TEXT_REPORT = "text_report"


def to_primitive(value: Any) -> Any:
    """Recursively convert dataclasses, enums and datetimes to JSON-ready values."""
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_primitive(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Mapping):
        return {str(k): to_primitive(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_primitive(v) for v in value]
    return value


def _parse_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)


@dataclass(frozen=True)
class Vector3:
    """A 3-component vector (x, y, z)."""
    x: float
    y: float
    z: float

    def magnitude(self) -> float:
        return math.sqrt(self.x ** 2 + self.y ** 2 + self.z ** 2)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Vector3":
        return cls(x=data["x"], y=data["y"], z=data["z"])


@dataclass(frozen=True)
class Point3:
    """Boundary point captured by the sensor layer or entered manually."""
    x: float
    y: float
    z: float
    confidence: float = 1.0  # 0-1 from the capture system
    timestamp: datetime = field(default_factory=utc_now)
    sensor_accuracy: SensorAccuracy = SensorAccuracy.HIGH

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Point3":
        return cls(
            x=data["x"],
            y=data["y"],
            z=data.get("z", 0.0),
            confidence=data.get("confidence", 1.0),
            timestamp=_parse_datetime(data["timestamp"]) if "timestamp" in data else utc_now(),
            sensor_accuracy=SensorAccuracy(data.get("sensor_accuracy", "high")),
        )


@dataclass(frozen=True)
class Plane:
    """Roof plane bounded by an ordered polygon of points.

    ``area``, ``perimeter`` and ``projected_area`` are derived values; the
    engine recomputes them from ``boundaries`` and never trusts the caller's.
    """
    id: str
    boundaries: Tuple[Point3, ...]
    normal: Vector3 = Vector3(0.0, 0.0, 1.0)
    pitch_angle_deg: float = 0.0  # 0-90
    azimuth_deg: float = 0.0  # 0-360
    area: float = 0.0
    perimeter: float = 0.0
    projected_area: float = 0.0
    surface_type: SurfaceType = SurfaceType.PRIMARY
    confidence: float = 1.0
    material: Optional[MaterialType] = None

    def __post_init__(self):
        object.__setattr__(self, 'boundaries', tuple(self.boundaries))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Plane":
        material = data.get("material")
        return cls(
            id=str(data["id"]),
            boundaries=tuple(Point3.from_dict(p) for p in data.get("boundaries", [])),
            normal=Vector3.from_dict(data["normal"]) if "normal" in data else Vector3(0.0, 0.0, 1.0),
            pitch_angle_deg=data.get("pitch_angle_deg", 0.0),
            azimuth_deg=data.get("azimuth_deg", 0.0),
            area=data.get("area", 0.0),
            perimeter=data.get("perimeter", 0.0),
            projected_area=data.get("projected_area", 0.0),
            surface_type=SurfaceType(data.get("surface_type", "primary")),
            confidence=data.get("confidence", 1.0),
            material=MaterialType(material) if material is not None else None,
        )


@dataclass(frozen=True)
class QualityMetrics:
    """Session quality snapshot taken when a measurement is created."""
    overall_score: float
    tracking_stability: float
    point_density: float  # boundary points per square meter
    duration_s: float
    lighting_quality: float
    movement_smoothness: float
    tracking_interruptions: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "QualityMetrics":
        return cls(**{f.name: data[f.name] for f in fields(cls) if f.name in data})


@dataclass
class ValidationResult:
    """Per-call validation report; never persisted on its own."""
    is_valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    quality_score: float = 0.0  # 0-100
    recommendations: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ValidationResult":
        return cls(
            is_valid=data["is_valid"],
            errors=list(data.get("errors", [])),
            warnings=list(data.get("warnings", [])),
            quality_score=data.get("quality_score", 0.0),
            recommendations=list(data.get("recommendations", [])),
        )


@dataclass(frozen=True)
class AuditEntry:
    """Append-only audit record; ``data_hash`` is a SHA-256 of the description."""
    id: str
    timestamp: datetime
    action: AuditAction
    user_id: str
    session_id: str
    description: str
    data_hash: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AuditEntry":
        return cls(
            id=data["id"],
            timestamp=_parse_datetime(data["timestamp"]),
            action=AuditAction(data["action"]),
            user_id=data["user_id"],
            session_id=data["session_id"],
            description=data["description"],
            data_hash=data["data_hash"],
        )


@dataclass(frozen=True)
class ComplianceStatus:
    """Compliance stub attached to every new measurement."""
    status: ComplianceState
    standards: Tuple[str, ...]
    last_check: datetime
    next_check: datetime
    certifications: Tuple[str, ...] = ()
    notes: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ComplianceStatus":
        return cls(
            status=ComplianceState(data["status"]),
            standards=tuple(data.get("standards", [])),
            last_check=_parse_datetime(data["last_check"]),
            next_check=_parse_datetime(data["next_check"]),
            certifications=tuple(data.get("certifications", [])),
            notes=tuple(data.get("notes", [])),
        )


@dataclass(frozen=True)
class Measurement:
    """Aggregate root produced by one successful engine computation.

    Invariant: ``total_area`` and ``total_projected_area`` are the sums of the
    corresponding plane fields. A re-measurement produces a new instance.
    ``device_info`` and ``metadata`` are read-only mappings. ``validation`` is
    a private copy of the advisory report taken at construction.
    """
    id: str
    property_id: str
    session_id: str
    user_id: str
    timestamp: datetime
    planes: Tuple[Plane, ...]
    total_area: float
    total_projected_area: float
    accuracy: float  # quality_score / 100 at creation
    quality_metrics: QualityMetrics
    audit_trail: Tuple[AuditEntry, ...]
    compliance: ComplianceStatus
    device_info: Mapping[str, Any] = field(default_factory=dict)
    validation: Optional[ValidationResult] = None
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, 'planes', tuple(self.planes))
        object.__setattr__(self, 'audit_trail', tuple(self.audit_trail))
        object.__setattr__(self, 'device_info', MappingProxyType(dict(self.device_info)))
        object.__setattr__(self, 'metadata', MappingProxyType(dict(self.metadata)))
        if self.validation is not None:
            object.__setattr__(self, 'validation', replace(
                self.validation,
                errors=list(self.validation.errors),
                warnings=list(self.validation.warnings),
                recommendations=list(self.validation.recommendations),
            ))

    def to_dict(self) -> Dict[str, Any]:
        return to_primitive(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Measurement":
        validation = data.get("validation")
        return cls(
            id=data["id"],
            property_id=data["property_id"],
            session_id=data["session_id"],
            user_id=data["user_id"],
            timestamp=_parse_datetime(data["timestamp"]),
            planes=tuple(Plane.from_dict(p) for p in data["planes"]),
            total_area=data["total_area"],
            total_projected_area=data["total_projected_area"],
            accuracy=data["accuracy"],
            quality_metrics=QualityMetrics.from_dict(data["quality_metrics"]),
            audit_trail=tuple(AuditEntry.from_dict(e) for e in data["audit_trail"]),
            compliance=ComplianceStatus.from_dict(data["compliance"]),
            device_info=dict(data.get("device_info", {})),
            validation=ValidationResult.from_dict(validation) if validation is not None else None,
            metadata=dict(data.get("metadata", {})),
        )


@dataclass(frozen=True)
class CostEstimate:
    """Placeholder cost figures derived from a price table."""
    material_cost: float
    labor_cost: float
    total_cost: float
    currency: str


@dataclass(frozen=True)
class MaterialCalculation:
    """Bill of quantities for a measurement."""
    base_area: float
    adjusted_area: float
    waste_percent: float
    complexity_factor: float
    dominant_material: MaterialType
    square_feet: float
    material_units: Dict[str, int]  # e.g. {'shingle_bundles': 29}
    cost_estimate: Optional[CostEstimate] = None


@dataclass(frozen=True)
class EngineConfig:
    """Engine configuration; immutable once an engine is built."""
    unit_system: UnitSystem = UnitSystem.METRIC
    area_precision_digits: int = 2
    pitch_correction_method: PitchCorrectionMethod = PitchCorrectionMethod.ADVANCED
    waste_factor_percent: float = 10.0
    quality_threshold: float = 75.0  # advisory only
    geometry_validation_enabled: bool = True

    def __post_init__(self):
        object.__setattr__(self, 'unit_system', UnitSystem(self.unit_system))
        object.__setattr__(self, 'pitch_correction_method',
                           PitchCorrectionMethod(self.pitch_correction_method))
        if not 0 <= self.area_precision_digits <= 10:
            raise ValueError("area_precision_digits must be between 0 and 10")
        if self.waste_factor_percent < 0:
            raise ValueError("waste_factor_percent must be non-negative")
        if not 0 <= self.quality_threshold <= 100:
            raise ValueError("quality_threshold must be between 0 and 100")
