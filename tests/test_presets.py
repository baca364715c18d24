"""Tests for level presets."""

import pytest

from inkstable import FilterKind, ManualFrameScheduler, create_stabilized_pointer, describe_level
from inkstable.presets import level_to_pipeline

from .helpers import jittery_line, y_variance


@pytest.mark.parametrize("level", [0, -5])
def test_level_zero_is_passthrough(level):
    """Level 0 and below should have no filters."""
    pointer = level_to_pipeline(level)
    assert pointer.filter_kinds == []
    assert not pointer.frame_batch_enabled


def test_noise_band():
    """Low levels should only reject noise."""
    config = describe_level(10).config
    assert config.kinds == [FilterKind.NOISE]
    assert config.get(FilterKind.NOISE).min_distance == pytest.approx(1.2)


def test_kalman_band():
    """Middle-low levels should add the Kalman filter."""
    preset = describe_level(30)
    kalman = preset.config.get(FilterKind.KALMAN)

    assert preset.config.kinds == [FilterKind.NOISE, FilterKind.KALMAN]
    assert kalman.process_noise == pytest.approx(0.096)
    assert kalman.measurement_noise == pytest.approx(0.58)
    assert not preset.frame_batch


def test_gaussian_band_enables_batching():
    """Gaussian band should enable frame batching."""
    preset = describe_level(50)
    gaussian = preset.config.get(FilterKind.GAUSSIAN)

    assert preset.config.kinds == [FilterKind.NOISE, FilterKind.KALMAN, FilterKind.GAUSSIAN]
    assert gaussian.size == 7
    assert gaussian.sigma == pytest.approx(1.3)
    assert preset.frame_batch


def test_light_string_band():
    """Level 70 should use a short string."""
    config = describe_level(70).config
    assert config.kinds == [
        FilterKind.NOISE, FilterKind.KALMAN, FilterKind.GAUSSIAN, FilterKind.STRING,
    ]
    assert config.get(FilterKind.GAUSSIAN).size == 9
    assert config.get(FilterKind.STRING).string_length == 8


def test_strong_string_band():
    """Level 90 should use a long string."""
    assert describe_level(90).config.get(FilterKind.STRING).string_length == 15


@pytest.mark.parametrize("level,expected", [(20, 1), (21, 2), (40, 2), (41, 3), (60, 3), (61, 4)])
def test_band_edges(level, expected):
    """Band edges should switch filters on."""
    assert len(describe_level(level).config.filters) == expected


def test_levels_above_range_are_clamped():
    """Levels above 100 should act as 100."""
    preset = describe_level(150)
    assert preset.level == 100
    assert preset.config == describe_level(100).config
    assert preset.config.get(FilterKind.NOISE).min_distance == pytest.approx(3.0)
    assert preset.config.get(FilterKind.GAUSSIAN).sigma == pytest.approx(1.6)


def test_factory_uses_given_scheduler():
    """Factory should use the given scheduler."""
    scheduler = ManualFrameScheduler()
    pointer = create_stabilized_pointer(50, scheduler=scheduler)
    assert pointer.scheduler is scheduler
    assert pointer.frame_batch_enabled


def test_preset_to_dict():
    """Preset should serialize its filters."""
    data = describe_level(30).to_dict()
    assert data["level"] == 30
    assert data["frame_batch"] is False
    assert [f["type"] for f in data["filters"]] == ["noise", "kalman"]


def test_variance_decreases_with_level():
    """Higher levels should smooth more."""
    samples = jittery_line()
    variances = []
    for level in (10, 50, 90):
        pointer = level_to_pipeline(level)
        pointer.add_points(samples)
        variances.append(y_variance(pointer.get_all_points()))

    assert variances[0] >= variances[1] >= variances[2]
