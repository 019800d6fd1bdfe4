"""
Estimation Module

Material quantities and placeholder cost estimation.
"""

from .pricing import PricingSource, RateTablePricing
from .material_estimator import MaterialEstimator

__all__ = ['PricingSource', 'RateTablePricing', 'MaterialEstimator']
