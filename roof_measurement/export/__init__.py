"""
Export Module

JSON, CSV and text report serialization.
"""

from .exporter import MeasurementExporter, parse_json

__all__ = ['MeasurementExporter', 'parse_json']
