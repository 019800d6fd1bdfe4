"""
Tests for the roof plane validator
"""

import pytest
from hypothesis import given, strategies as st

from roof_measurement.data_models import EngineConfig, Plane, Vector3
from roof_measurement.validation.plane_validator import PlaneValidator

from plane_factory import points_from_xy, rect_plane


class TestPlaneValidator:
    """Test suite for plane set validation."""

    @pytest.fixture
    def validator(self, engine_config, config_manager):
        """Fixture providing a validator with the default configuration."""
        return PlaneValidator(engine_config, config_manager)

    def test_validator_initialization(self, validator):
        """Test that the validator picks up configured thresholds."""
        assert validator.critical_confidence == pytest.approx(0.3)
        assert validator.warning_confidence == pytest.approx(0.6)
        assert validator.min_plane_area < validator.max_plane_area
        assert hasattr(validator, 'logger')

    def test_empty_input(self, validator):
        result = validator.validate([])

        assert not result.is_valid
        assert result.errors == ["No planes detected"]
        assert result.quality_score == 0
        assert result.recommendations

    def test_valid_three_plane_roof(self, validator, three_plane_roof):
        result = validator.validate(three_plane_roof)

        assert result.is_valid
        assert result.errors == []
        assert result.warnings == []
        assert result.quality_score > 90

    def test_two_point_plane_rejected(self, validator):
        """A plane with two boundary points fails with the geometry message."""
        plane = Plane(id="line", boundaries=points_from_xy([(0, 0), (5, 0)]))
        result = validator.validate([plane])

        assert not result.is_valid
        assert any("insufficient boundary points" in e for e in result.errors)

    def test_collinear_triangle_rejected(self, validator):
        plane = Plane(id="flat", boundaries=points_from_xy([(0, 0), (1, 1), (2, 2)]))
        result = validator.validate([plane])

        assert not result.is_valid
        assert "Invalid geometry for plane flat" in result.errors[0]

    def test_bowtie_rejected(self, validator):
        plane = Plane(id="bowtie", boundaries=points_from_xy([(0, 0), (4, 4), (4, 0), (0, 4)]))
        result = validator.validate([plane])

        assert not result.is_valid
        assert any("bowtie" in e and "insufficient boundary points" in e for e in result.errors)

    def test_non_unit_normal_rejected(self, validator):
        plane = rect_plane("tilted", 5, 5, normal=Vector3(0.0, 0.0, 2.0))
        assert not validator.is_valid_geometry(plane)

    def test_geometry_validation_disabled(self, config_manager):
        """Disabling geometry validation skips shape checks but keeps the point minimum."""
        validator = PlaneValidator(EngineConfig(geometry_validation_enabled=False), config_manager)

        bowtie = Plane(id="bowtie", boundaries=points_from_xy([(0, 0), (4, 4), (4, 0), (0, 4)]))
        assert validator.is_valid_geometry(bowtie)

        line = Plane(id="line", boundaries=points_from_xy([(0, 0), (5, 0)]))
        assert not validator.is_valid_geometry(line)

    def test_critically_low_confidence(self, validator):
        result = validator.validate([rect_plane("p", 10, 5, confidence=0.29)])

        assert not result.is_valid
        assert any("Critically low confidence for plane p" in e for e in result.errors)

    def test_confidence_at_critical_boundary_is_warning(self, validator):
        """Exactly 0.3 is not below the critical limit, so only a warning is raised."""
        result = validator.validate([rect_plane("p", 10, 5, confidence=0.3)])

        assert result.is_valid
        assert result.errors == []
        assert any("Low confidence for plane p: 30.0%" in w for w in result.warnings)

    def test_confidence_at_warning_boundary(self, validator):
        result = validator.validate([rect_plane("p", 10, 5, confidence=0.6)])
        assert not any("confidence" in w for w in result.warnings)

    def test_small_and_large_plane_warnings(self, validator):
        small = rect_plane("small", 0.5, 0.5)
        large = rect_plane("large", 50, 50, x0=10)
        result = validator.validate([small, large])

        assert result.is_valid
        assert any("Very small plane small" in w for w in result.warnings)
        assert any("Unusually large plane large" in w for w in result.warnings)

    def test_caller_area_is_ignored(self, validator):
        """Size checks use the area recomputed from the boundary."""
        result = validator.validate([rect_plane("p", 10, 8, area=0.0)])
        assert not any("Very small" in w for w in result.warnings)

    def test_pitch_recommendations_do_not_block(self, validator):
        steep = rect_plane("steep", 10, 8, pitch=65.0)
        flat = rect_plane("flat", 10, 8, x0=20, pitch=1.0)
        result = validator.validate([steep, flat])

        assert result.is_valid
        assert any("Steep roof detected (65.0°)" in r for r in result.recommendations)
        assert any("Nearly flat roof detected (1.0°)" in r for r in result.recommendations)

    def test_low_point_density_warning(self, validator):
        triangle = Plane(id="tri", boundaries=points_from_xy([(0, 0), (6, 0), (0, 6)]))
        result = validator.validate([triangle])

        assert result.is_valid
        assert any("Low boundary point density for plane tri" in w for w in result.warnings)

    def test_quality_threshold_is_advisory(self, config_manager):
        validator = PlaneValidator(EngineConfig(quality_threshold=100), config_manager)
        result = validator.validate([rect_plane("p", 10, 5, confidence=0.5)])

        assert result.is_valid
        assert any("Consider remeasuring" in r for r in result.recommendations)
        assert any("Move closer" in r for r in result.recommendations)

    def test_single_plane_scenario(self, validator):
        """One 10x5 plane at confidence 0.3: 12 + 30 + 20 + 10."""
        result = validator.validate([rect_plane("p", 10, 5, confidence=0.3)])
        assert result.quality_score == 72

    def test_half_point_score_rounds_up(self, validator):
        """One 10x5 plane at confidence 0.3125: 12.5 + 30 + 20 + 10 = 72.5."""
        result = validator.validate([rect_plane("p", 10, 5, confidence=0.3125)])
        assert result.quality_score == 73

    @pytest.mark.parametrize("kwargs,message", [
        ({'confidence': 1.7}, "Confidence for plane p outside 0-1: 1.70"),
        ({'confidence': -0.1}, "Confidence for plane p outside 0-1: -0.10"),
        ({'pitch': -20.0}, "Pitch for plane p outside 0-90°: -20.0°"),
        ({'pitch': 95.0}, "Pitch for plane p outside 0-90°: 95.0°"),
    ])
    def test_out_of_range_values_rejected(self, validator, kwargs, message):
        result = validator.validate([rect_plane("p", 10, 8, **kwargs)])

        assert not result.is_valid
        assert message in result.errors
        assert result.quality_score < 100

    def test_range_limits_are_inclusive(self, validator):
        planes = [rect_plane("vertical", 10, 8, pitch=90.0),
                  rect_plane("flat", 10, 8, x0=20, pitch=0.0, confidence=1.0)]
        result = validator.validate(planes)

        assert result.is_valid
        assert not any("outside" in e for e in result.errors)

    def test_azimuth_out_of_range_warns(self, validator):
        result = validator.validate([rect_plane("p", 10, 8, azimuth=360.0)])

        assert result.is_valid
        assert any("Azimuth for plane p outside 0-360°: 360.0°" in w for w in result.warnings)

    @pytest.mark.property
    @given(
        confidence=st.floats(min_value=0.0, max_value=1.0),
        lower_by=st.floats(min_value=0.0, max_value=1.0),
    )
    def test_property_quality_monotonic_in_confidence(self, confidence, lower_by):
        """Property test: lowering one plane's confidence never raises the score."""
        validator = PlaneValidator(EngineConfig())
        others = [rect_plane("b", 6, 4, x0=20, confidence=0.9),
                  rect_plane("c", 4, 3, x0=40, confidence=0.8)]

        original = validator.validate([rect_plane("a", 10, 8, confidence=confidence)] + others)
        lowered = validator.validate(
            [rect_plane("a", 10, 8, confidence=max(0.0, confidence - lower_by))] + others)

        assert lowered.quality_score <= original.quality_score
