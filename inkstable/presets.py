"""Stabilization presets keyed by a single 0-100 strength level.

Filters are stacked as the level rises:

- 0: no correction, samples pass straight through
- 1-20: noise filter
- 21-40: + Kalman filter
- 41-60: + Gaussian smoothing and frame batching
- 61-80: + light string stabilization, wider Gaussian
- 81-100: strong string stabilization
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .pipeline import PipelineBuilder, PipelineConfig
from .pointer import StabilizedPointer
from .scheduler import FrameScheduler

MIN_LEVEL = 0
MAX_LEVEL = 100


@dataclass
class LevelPreset:
    level: int
    config: PipelineConfig = field(default_factory=PipelineConfig)
    frame_batch: bool = False

    def to_dict(self) -> dict:
        return {
            "level": self.level,
            "frame_batch": self.frame_batch,
            "filters": self.config.to_list(),
        }


def clamp_level(level: int) -> int:
    return max(MIN_LEVEL, min(MAX_LEVEL, int(level)))


def describe_level(level: int) -> LevelPreset:
    """Resolve a level to its filter stack without building a pointer."""
    level = clamp_level(level)
    if level <= 0:
        return LevelPreset(level=level)

    builder = PipelineBuilder()
    builder.with_noise(1.0 + level * 0.02)  # 1.0 - 3.0

    if level >= 21:
        builder.with_kalman(
            0.12 - level * 0.0008,  # 0.12 - 0.04
            0.4 + level * 0.006,  # 0.4 - 1.0
        )

    frame_batch = False
    if level >= 41:
        gaussian_size = 9 if level >= 61 else 7
        builder.with_gaussian(gaussian_size, 1.0 + level * 0.006)  # sigma 1.0 - 1.6
        frame_batch = True

    if level >= 61:
        builder.with_string(15 if level >= 81 else 8)

    return LevelPreset(level=level, config=builder.build(), frame_batch=frame_batch)


def level_to_pipeline(level: int, scheduler: Optional[FrameScheduler] = None) -> StabilizedPointer:
    """Build a StabilizedPointer tuned for ``level``; out-of-range levels are clamped."""
    preset = describe_level(level)
    return StabilizedPointer(preset.config, scheduler=scheduler, frame_batch=preset.frame_batch)


create_stabilized_pointer = level_to_pipeline


def preset_levels() -> List[int]:
    """One representative level per band."""
    return [0, 10, 30, 50, 70, 90]
