"""
Measurement Module

Aggregates validated planes into measurements with an audit trail.
"""

from .audit_trail import AuditTrail
from .material_classifier import MaterialClassifier, HeuristicMaterialClassifier
from .engine import RoofMeasurementEngine

__all__ = ['AuditTrail', 'MaterialClassifier', 'HeuristicMaterialClassifier', 'RoofMeasurementEngine']
