"""Whole-stroke stabilization, applied after the pen is lifted.

Unlike the live pipeline this sees the complete stroke, so it can be used
to re-smooth a stored stroke when the stabilization strength changes.
"""

from dataclasses import replace
from typing import List, Sequence, Tuple

from .filters import gaussian_kernel
from .types import PointerSample

MAX_STABILIZATION = 1.0

MIN_KERNEL_SIZE = 3
MAX_KERNEL_SIZE = 21


def stabilization_to_params(stabilization: float) -> Tuple[int, float]:
    """Map a strength in [0, 1] to an odd kernel size in [3, 21] and its sigma."""
    if stabilization <= 0:
        return 1, 0.0

    stabilization = min(stabilization, MAX_STABILIZATION)
    raw_size = MIN_KERNEL_SIZE + stabilization * (MAX_KERNEL_SIZE - MIN_KERNEL_SIZE)
    size = int(raw_size // 2) * 2 + 1

    # sigma of about a third of the kernel width
    return size, size / 3


def stabilize_stroke(points: Sequence[PointerSample], size: int,
                     sigma: float) -> List[PointerSample]:
    """Smooth a finished stroke with a centred Gaussian window.

    The first point is repeated ``size // 2`` times in front of the stroke so
    the start is smoothed as well. Near the end of the stroke the window is
    cut short instead of padded.
    Pressure and device kind are kept. Raises ValueError for a non-positive
    ``sigma`` when ``size > 1``.
    """
    if size > 1 and sigma <= 0:
        raise ValueError(f"sigma must be > 0 for size {size}, got {sigma}")
    if not points:
        return []
    if len(points) == 1 or size <= 1:
        return list(points)

    kernel = gaussian_kernel(size, sigma)
    center = size // 2
    padded = [points[0]] * center + list(points)

    result = []
    for i, point in enumerate(points):
        sum_x = sum_y = weight_sum = 0.0
        for k in range(size):
            idx = i + k
            if idx >= len(padded):
                break
            sum_x += padded[idx].x * kernel[k]
            sum_y += padded[idx].y * kernel[k]
            weight_sum += kernel[k]
        result.append(replace(point, x=sum_x / weight_sum, y=sum_y / weight_sum))

    return result
