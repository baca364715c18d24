"""Stabilization stages applied to a live pointer stream.

Each stage owns the state it needs for the current stroke and is reset
between strokes by the pipeline. A stage returns the (possibly moved)
working sample, or None to reject the raw sample outright.
"""

import math
from abc import ABC, abstractmethod
from dataclasses import replace
from typing import List, Optional, Sequence

from .types import FilterKind, PointerSample


def gaussian_kernel(size: int, sigma: float) -> List[float]:
    """Unnormalized Gaussian weights centred on ``size // 2``."""
    center = size // 2
    kernel = []
    for i in range(size):
        offset = i - center
        kernel.append(math.exp(-(offset * offset) / (2 * sigma * sigma)))
    return kernel


class Stage(ABC):
    kind: FilterKind

    @abstractmethod
    def apply(self, sample: PointerSample, raw: PointerSample,
              history: Sequence[PointerSample]) -> Optional[PointerSample]:
        """Process one sample.

        Args:
            sample: working sample as left by the previous stage
            raw: the untouched sample as submitted
            history: accepted raw samples of the current stroke, oldest first,
                not including ``raw``
        """

    @abstractmethod
    def configure(self, config) -> None:
        """Take new parameters without discarding stroke state."""

    def reset(self) -> None:
        pass


class NoiseStage(Stage):
    """Rejects samples closer than ``min_distance`` to the last accepted one."""

    kind = FilterKind.NOISE

    def __init__(self, config):
        self.configure(config)

    def configure(self, config) -> None:
        self.min_distance = config.min_distance

    def apply(self, sample, raw, history):
        if self.min_distance <= 0 or not history:
            return sample
        if raw.distance_to(history[-1]) < self.min_distance:
            return None
        return sample


class KalmanStage(Stage):
    """Constant-velocity Kalman filter with one covariance scalar for both axes.

    Time is counted in samples (dt = 1), so the velocity is simply the
    difference between successive estimates.
    """

    kind = FilterKind.KALMAN

    def __init__(self, config):
        self.configure(config)
        self.reset()

    def configure(self, config) -> None:
        self.process_noise = config.process_noise
        self.measurement_noise = config.measurement_noise

    def reset(self) -> None:
        self.state = None  # (x, y, vx, vy)
        self.covariance = 1.0

    def apply(self, sample, raw, history):
        if self.state is None:
            self.state = (sample.x, sample.y, 0.0, 0.0)
            self.covariance = 1.0
            return sample

        x, y, vx, vy = self.state

        # Predict
        predicted_x = x + vx
        predicted_y = y + vy
        predicted_p = self.covariance + self.process_noise

        # Update
        gain = predicted_p / (predicted_p + self.measurement_noise)
        new_x = predicted_x + gain * (sample.x - predicted_x)
        new_y = predicted_y + gain * (sample.y - predicted_y)

        self.covariance = (1 - gain) * predicted_p
        self.state = (new_x, new_y, new_x - x, new_y - y)

        return replace(sample, x=new_x, y=new_y)


class GaussianStage(Stage):
    """Weighted average of the raw neighbourhood around the newest sample.

    Indices beyond either end of the window are clamped to the nearest
    sample (edge replication). Since the newest sample is always the last
    one, the right half of the kernel sees copies of it.
    """

    kind = FilterKind.GAUSSIAN

    def __init__(self, config):
        self.configure(config)

    def configure(self, config) -> None:
        self.size = config.size
        self.sigma = config.sigma
        self.kernel = gaussian_kernel(self.size, self.sigma) if self.size > 1 else []

    def apply(self, sample, raw, history):
        if self.size <= 1:
            return sample
        center = self.size // 2
        window = list(history[max(0, len(history) - center):])
        window.append(raw)
        return self.apply_windowed(window, len(window) - 1)

    def apply_windowed(self, window: Sequence[PointerSample], center_idx: int) -> PointerSample:
        """Smooth ``window[center_idx]`` against its neighbours in ``window``."""
        center = self.size // 2
        last = len(window) - 1
        sum_x = sum_y = weight_sum = 0.0
        for k, weight in enumerate(self.kernel):
            idx = min(max(center_idx - center + k, 0), last)
            point = window[idx]
            sum_x += point.x * weight
            sum_y += point.y * weight
            weight_sum += weight

        target = window[center_idx]
        return replace(target, x=sum_x / weight_sum, y=sum_y / weight_sum)


class StringStage(Stage):
    """Lazy brush: the drawn point hangs off the pen on a string.

    Movement inside the string length leaves the anchor where it is; once
    the pen pulls the string taut the anchor is dragged along so that it
    trails the pen by exactly ``string_length``.
    """

    kind = FilterKind.STRING

    def __init__(self, config):
        self.configure(config)
        self.reset()

    def configure(self, config) -> None:
        self.string_length = config.string_length

    def reset(self) -> None:
        self.anchor = None  # (x, y)

    def apply(self, sample, raw, history):
        if self.anchor is None or self.string_length <= 0:
            self.anchor = (sample.x, sample.y)
            return sample

        ax, ay = self.anchor
        dx = sample.x - ax
        dy = sample.y - ay
        dist = math.hypot(dx, dy)

        if dist == 0 or dist <= self.string_length:
            return replace(sample, x=ax, y=ay)

        ratio = (dist - self.string_length) / dist
        self.anchor = (ax + dx * ratio, ay + dy * ratio)
        return replace(sample, x=self.anchor[0], y=self.anchor[1])


STAGE_TYPES = {
    FilterKind.NOISE: NoiseStage,
    FilterKind.KALMAN: KalmanStage,
    FilterKind.GAUSSIAN: GaussianStage,
    FilterKind.STRING: StringStage,
}


def build_stage(config) -> Stage:
    return STAGE_TYPES[config.kind](config)
