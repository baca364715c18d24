"""Tests for pointer event extraction."""

from types import SimpleNamespace

import pytest

from inkstable import DeviceKind, PointerEvent, PointerSample, TargetElement, extract_samples


@pytest.mark.parametrize("value,expected", [
    ("pen", DeviceKind.PEN),
    ("touch", DeviceKind.TOUCH),
    ("PEN", DeviceKind.PEN),
    ("mouse", DeviceKind.MOUSE),
    ("stylus-9000", DeviceKind.MOUSE),
    ("", DeviceKind.MOUSE),
    (None, DeviceKind.MOUSE),
    (DeviceKind.TOUCH, DeviceKind.TOUCH),
])
def test_device_kind_parse(value, expected):
    """Unknown device kinds should fall back to mouse."""
    assert DeviceKind.parse(value) == expected


def test_single_event_without_coalesced():
    """Single event should map to element coordinates."""
    samples = extract_samples(PointerEvent(15, 25, 0.3, "pen"), TargetElement(left=5, top=5))
    assert samples == [PointerSample(10, 20, 0.3, DeviceKind.PEN)]


def test_coalesced_events_keep_order():
    """Coalesced events should be used in order."""
    event = PointerEvent(
        9, 9, pointer_type="touch",
        coalesced=[PointerEvent(1, 1, pointer_type="touch"), PointerEvent(4, 4, pointer_type="touch")],
    )
    samples = extract_samples(event, TargetElement())

    assert [(s.x, s.y) for s in samples] == [(1, 1), (4, 4)]
    assert all(s.device_kind == DeviceKind.TOUCH for s in samples)


def test_zoom_scales_local_coordinates():
    """Zoom should scale local coordinates."""
    samples = extract_samples(PointerEvent(110, 60), TargetElement(left=10, top=10), zoom=0.5)
    assert (samples[0].x, samples[0].y) == (200, 100)


def test_invalid_zoom():
    """Non-positive zoom should be rejected."""
    with pytest.raises(ValueError):
        extract_samples(PointerEvent(0, 0), TargetElement(), zoom=0)


def test_event_without_coalesced_support():
    """Events without coalesced support should still work."""
    event = SimpleNamespace(client_x=3, client_y=4, pressure=1.0, pointer_type="unknown")
    samples = extract_samples(event, TargetElement())
    assert samples == [PointerSample(3, 4, 1.0, DeviceKind.MOUSE)]


def test_sample_dict_round_trip():
    """Samples should serialize with pointer_type."""
    sample = PointerSample(1.5, 2.5, 0.25, DeviceKind.PEN)
    data = sample.to_dict()

    assert data == {"x": 1.5, "y": 2.5, "pressure": 0.25, "pointer_type": "pen"}
    assert PointerSample.from_dict(data) == sample
    assert PointerSample.from_dict({"x": 1, "y": 2}).device_kind == DeviceKind.MOUSE
