"""
Material Estimator

Converts a measurement into a waste- and complexity-adjusted area, discrete
material units (shingle bundles, metal sheets, tiles) and an optional cost
estimate.
"""

import logging
import math
from collections import defaultdict
from typing import Dict, Optional, Sequence

from ..data_models import (
    EngineConfig, MaterialCalculation, MaterialType, Measurement, Plane, UnitSystem,
)
from ..geometry.correction import round_half_up
from ..geometry.polygon import square_meters_to_square_feet
from ..utils.config_manager import ConfigManager
from .pricing import PricingSource, RateTablePricing


class MaterialEstimator:
    """Bill-of-quantities calculator for roof measurements."""

    def __init__(self,
                 engine_config: Optional[EngineConfig] = None,
                 config_manager: Optional[ConfigManager] = None,
                 pricing: Optional[PricingSource] = None):
        """
        Initialize material estimator.

        Args:
            engine_config: Engine configuration. If None, built from config_manager.
            config_manager: Configuration manager instance
            pricing: Cost source. Defaults to the configured rate table.
        """
        self.config_manager = config_manager or ConfigManager()
        self.config = engine_config or self.config_manager.get_engine_config()
        self.logger = logging.getLogger(__name__)

        mat = self.config_manager.get_material_params()
        self.shingle_bundle_sqft = float(mat.get('shingle_bundle_sqft', 33.3))
        self.metal_sheet_sqft = float(mat.get('metal_sheet_sqft', 36.0))
        self.tile_sqft = float(mat.get('tile_sqft', 1.0))
        self.complexity_cap = float(mat.get('complexity_cap', 1.5))

        self.pricing = pricing or RateTablePricing.from_config(
            self.config_manager, precision=self.config.area_precision_digits)

    def estimate(self, measurement: Measurement, include_cost: bool = True) -> MaterialCalculation:
        """
        Calculate material requirements for a measurement.

        Args:
            measurement: Completed measurement
            include_cost: Whether to attach a cost estimate

        Returns:
            Material calculation
        """
        base_area = measurement.total_projected_area
        complexity = self.complexity_factor(measurement.planes)
        waste_multiplier = 1 + self.config.waste_factor_percent / 100
        adjusted_area = base_area * waste_multiplier * complexity

        dominant = self.dominant_material(measurement.planes)
        square_feet = self.to_square_feet(adjusted_area)
        units = self.material_units(square_feet, dominant)

        cost = self.pricing.estimate(square_feet, dominant) if include_cost else None

        precision = self.config.area_precision_digits
        calculation = MaterialCalculation(
            base_area=round(base_area, precision),
            adjusted_area=round(adjusted_area, precision),
            waste_percent=round(self.config.waste_factor_percent + (complexity - 1) * 100, precision),
            complexity_factor=complexity,
            dominant_material=dominant,
            square_feet=round(square_feet, precision),
            material_units=units,
            cost_estimate=cost,
        )

        self.logger.info(
            f"Materials for {measurement.id}: {dominant.value}, "
            f"adjusted area {calculation.adjusted_area}, units {units}"
        )
        return calculation

    def complexity_factor(self, planes: Sequence[Plane]) -> float:
        """
        Complexity multiplier from plane count, pitch, size and orientation.

        Capped at ``complexity_cap`` (1.5 by default).
        """
        if not planes:
            return 1.0

        factor = 1.0

        if len(planes) > 4:
            factor += (len(planes) - 4) * 0.05

        avg_pitch = sum(p.pitch_angle_deg for p in planes) / len(planes)
        if avg_pitch > 30:
            factor += (avg_pitch - 30) * 0.002

        factor += sum(1 for p in planes if p.area < 10) * 0.03

        orientations = {(round_half_up(p.azimuth_deg / 45) * 45) % 360 for p in planes}
        if len(orientations) > 2:
            factor += (len(orientations) - 2) * 0.02

        return min(factor, self.complexity_cap)

    def dominant_material(self, planes: Sequence[Plane]) -> MaterialType:
        """Material covering the largest summed plane area."""
        areas: Dict[MaterialType, float] = defaultdict(float)
        for plane in planes:
            areas[plane.material or MaterialType.UNKNOWN] += plane.area
        if not areas:
            return MaterialType.UNKNOWN
        return max(areas.items(), key=lambda item: item[1])[0]

    def to_square_feet(self, area: float) -> float:
        """Express an area in square feet; metric areas are converted."""
        if self.config.unit_system is UnitSystem.METRIC:
            return square_meters_to_square_feet(area)
        return area

    def material_units(self, square_feet: float, material: MaterialType) -> Dict[str, int]:
        """Discrete purchase units for the dominant material."""
        if material is MaterialType.SHINGLE:
            return {'shingle_bundles': math.ceil(square_feet / self.shingle_bundle_sqft)}
        if material is MaterialType.METAL:
            return {'metal_sheets': math.ceil(square_feet / self.metal_sheet_sqft)}
        if material is MaterialType.TILE:
            return {'tiles': math.ceil(square_feet / self.tile_sqft)}
        return {}
