"""
Validation Module

Pre-flight plane validation and post-hoc measurement consistency checks.
"""

from .plane_validator import PlaneValidator
from .measurement_validator import MeasurementValidator

__all__ = ['PlaneValidator', 'MeasurementValidator']
