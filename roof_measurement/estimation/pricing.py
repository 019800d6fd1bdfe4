"""
Placeholder Pricing

Per-square-foot material and labor rates read from configuration. Stands in
for a real pricing source; anything with a compatible ``estimate`` method can
replace it.
"""

from typing import Dict, Optional, Protocol

from ..data_models import CostEstimate, MaterialType
from ..utils.config_manager import ConfigManager

DEFAULT_MATERIAL_RATE = 4.00
DEFAULT_LABOR_RATE = 3.00


class PricingSource(Protocol):
    def estimate(self, square_feet: float, material: MaterialType) -> CostEstimate:
        ...


class RateTablePricing:
    """Fixed rate table pricing."""

    def __init__(self,
                 material_rates: Dict[str, float],
                 labor_rates: Dict[str, float],
                 currency: str = "USD",
                 precision: int = 2):
        self.material_rates = dict(material_rates)
        self.labor_rates = dict(labor_rates)
        self.currency = currency
        self.precision = precision

    @classmethod
    def from_config(cls, config_manager: Optional[ConfigManager] = None,
                    precision: int = 2) -> "RateTablePricing":
        config = config_manager or ConfigManager()
        pricing = config.get_pricing_params()
        return cls(
            material_rates=pricing.get('material_rates', {}),
            labor_rates=pricing.get('labor_rates', {}),
            currency=pricing.get('currency', 'USD'),
            precision=precision,
        )

    def estimate(self, square_feet: float, material: MaterialType) -> CostEstimate:
        key = MaterialType(material).value
        material_cost = square_feet * float(self.material_rates.get(key, DEFAULT_MATERIAL_RATE))
        labor_cost = square_feet * float(self.labor_rates.get(key, DEFAULT_LABOR_RATE))
        return CostEstimate(
            material_cost=round(material_cost, self.precision),
            labor_cost=round(labor_cost, self.precision),
            total_cost=round(material_cost + labor_cost, self.precision),
            currency=self.currency,
        )
