"""Sample builders shared by the tests."""

import random
import statistics

from inkstable import DeviceKind, PointerSample


def make_point(x, y, pressure=0.5, device_kind=DeviceKind.PEN):
    return PointerSample(x=float(x), y=float(y), pressure=pressure, device_kind=device_kind)


def jittery_line(count=200, step=2.0, jitter=1.5, seed=7):
    """Points along y=0 moving right, with uniform jitter on both axes."""
    rng = random.Random(seed)
    return [
        make_point(i * step + rng.uniform(-jitter, jitter), rng.uniform(-jitter, jitter))
        for i in range(count)
    ]


def y_variance(points):
    return statistics.pvariance([p.y for p in points])
