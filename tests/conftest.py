"""
Pytest configuration and fixtures for roof measurement tests.
"""

import pytest

from roof_measurement.data_models import EngineConfig, SurfaceType
from roof_measurement.measurement.engine import RoofMeasurementEngine
from roof_measurement.utils.config_manager import ConfigManager

from plane_factory import rect_plane


def pytest_configure(config):
    config.addinivalue_line("markers", "property: hypothesis-based property tests")


@pytest.fixture
def config_manager():
    """Fixture providing a configuration manager instance."""
    return ConfigManager()


@pytest.fixture
def engine_config():
    """Fixture providing the default engine configuration."""
    return EngineConfig()


@pytest.fixture
def engine(config_manager):
    """Fixture providing a fresh engine for one measurement session."""
    return RoofMeasurementEngine(EngineConfig(), config_manager)


@pytest.fixture
def three_plane_roof():
    """10x8 primary, 4x3 dormer and 6x4 secondary planes, flat and fully confident."""
    return [
        rect_plane("primary-1", 10, 8, surface_type=SurfaceType.PRIMARY),
        rect_plane("dormer-1", 4, 3, x0=20, surface_type=SurfaceType.DORMER),
        rect_plane("secondary-1", 6, 4, x0=30, surface_type=SurfaceType.SECONDARY),
    ]


@pytest.fixture
def measurement(engine, three_plane_roof):
    """Fixture providing a computed measurement for the three-plane roof."""
    return engine.compute(three_plane_roof, "session-1", "user-1")
