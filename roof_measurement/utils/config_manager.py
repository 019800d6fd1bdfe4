"""
Configuration Management System

Handles loading, validation, and management of engine parameters.
"""

import yaml
from typing import Dict, Any, Optional
from pathlib import Path

from ..data_models import EngineConfig, PitchCorrectionMethod, UnitSystem


class ConfigManager:
    """Manages configuration parameters for the roof measurement engine."""

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize configuration manager.

        Args:
            config_path: Path to configuration file. If None, uses default config.
        """
        self.config_path = config_path or self._get_default_config_path()
        self.config = self._load_config()
        self._validate_config()

    def _get_default_config_path(self) -> str:
        """Get path to default configuration file."""
        package_dir = Path(__file__).parent.parent
        return str(package_dir / "config" / "default_config.yaml")

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file."""
        try:
            with open(self.config_path, 'r') as file:
                config = yaml.safe_load(file)
            return config or {}
        except FileNotFoundError:
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")
        except yaml.YAMLError as e:
            raise ValueError(f"Error parsing configuration file: {e}")

    def _validate_config(self) -> None:
        """Validate configuration parameters for consistency and feasibility."""
        engine = self.config.get('engine', {})

        unit_system = engine.get('unit_system', 'metric')
        if unit_system not in [u.value for u in UnitSystem]:
            raise ValueError(f"Unknown unit_system: {unit_system}")

        method = engine.get('pitch_correction_method', 'advanced')
        if method not in [m.value for m in PitchCorrectionMethod]:
            raise ValueError(f"Unknown pitch_correction_method: {method}")

        precision = engine.get('area_precision_digits', 2)
        if not isinstance(precision, int) or not 0 <= precision <= 10:
            raise ValueError("area_precision_digits must be an integer between 0 and 10")

        if float(engine.get('waste_factor_percent', 10.0)) < 0:
            raise ValueError("waste_factor_percent must be non-negative")

        threshold = float(engine.get('quality_threshold', 75.0))
        if not 0 <= threshold <= 100:
            raise ValueError("quality_threshold must be between 0 and 100")

        # Validate plane thresholds
        val = self.config.get('validation', {})
        critical = float(val.get('critical_confidence', 0.3))
        warning = float(val.get('warning_confidence', 0.6))
        if critical >= warning:
            raise ValueError("critical_confidence must be less than warning_confidence")

        min_area = float(val.get('min_plane_area', 0.5))
        max_area = float(val.get('max_plane_area', 2000.0))
        if min_area >= max_area:
            raise ValueError("min_plane_area must be less than max_plane_area")

        # Validate material coverage
        mat = self.config.get('materials', {})
        for key in ('shingle_bundle_sqft', 'metal_sheet_sqft', 'tile_sqft'):
            if float(mat.get(key, 1.0)) <= 0:
                raise ValueError(f"{key} must be positive")
        if float(mat.get('complexity_cap', 1.5)) < 1.0:
            raise ValueError("complexity_cap must be at least 1.0")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation.

        Args:
            key: Configuration key (e.g., 'engine.area_precision_digits')
            default: Default value if key not found

        Returns:
            Configuration value
        """
        keys = key.split('.')
        value = self.config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def set(self, key: str, value: Any) -> None:
        """
        Set configuration value using dot notation.

        Args:
            key: Configuration key (e.g., 'engine.waste_factor_percent')
            value: Value to set
        """
        keys = key.split('.')
        config_ref = self.config

        for k in keys[:-1]:
            if k not in config_ref:
                config_ref[k] = {}
            config_ref = config_ref[k]

        config_ref[keys[-1]] = value
        self._validate_config()

    def save(self, output_path: Optional[str] = None) -> None:
        """
        Save current configuration to file.

        Args:
            output_path: Path to save configuration. If None, overwrites current file.
        """
        save_path = output_path or self.config_path

        with open(save_path, 'w') as file:
            yaml.dump(self.config, file, default_flow_style=False, indent=2)

    def get_engine_config(self) -> EngineConfig:
        """Build an immutable engine configuration from the 'engine' section."""
        engine = self.config.get('engine', {})
        return EngineConfig(
            unit_system=UnitSystem(engine.get('unit_system', 'metric')),
            area_precision_digits=int(engine.get('area_precision_digits', 2)),
            pitch_correction_method=PitchCorrectionMethod(
                engine.get('pitch_correction_method', 'advanced')),
            waste_factor_percent=float(engine.get('waste_factor_percent', 10.0)),
            quality_threshold=float(engine.get('quality_threshold', 75.0)),
            geometry_validation_enabled=bool(engine.get('geometry_validation_enabled', True)),
        )

    def get_validation_params(self) -> Dict[str, Any]:
        """Get plane and measurement validation thresholds as a dictionary."""
        return self.config.get('validation', {})

    def get_material_params(self) -> Dict[str, Any]:
        """Get material coverage parameters as a dictionary."""
        return self.config.get('materials', {})

    def get_pricing_params(self) -> Dict[str, Any]:
        """Get placeholder pricing tables as a dictionary."""
        return self.config.get('pricing', {})

    def get_compliance_params(self) -> Dict[str, Any]:
        """Get compliance stub parameters as a dictionary."""
        return self.config.get('compliance', {})
