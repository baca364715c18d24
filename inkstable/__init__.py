"""InkStable - real-time stylus stroke stabilization."""

__version__ = "0.1.0"

from .events import PointerEvent, TargetElement, extract_samples
from .pipeline import (
    FilterPipeline,
    GaussianConfig,
    KalmanConfig,
    NoiseConfig,
    PipelineBuilder,
    PipelineConfig,
    StringConfig,
)
from .pointer import StabilizedPointer
from .presets import LevelPreset, create_stabilized_pointer, describe_level, level_to_pipeline
from .scheduler import AsyncioFrameScheduler, FrameBatcher, FrameScheduler, ManualFrameScheduler
from .stroke import stabilization_to_params, stabilize_stroke
from .types import DeviceKind, FilterKind, PointerSample

__all__ = [
    "__version__",
    "DeviceKind",
    "FilterKind",
    "PointerSample",
    "PointerEvent",
    "TargetElement",
    "extract_samples",
    "NoiseConfig",
    "KalmanConfig",
    "GaussianConfig",
    "StringConfig",
    "PipelineConfig",
    "PipelineBuilder",
    "FilterPipeline",
    "FrameScheduler",
    "ManualFrameScheduler",
    "AsyncioFrameScheduler",
    "FrameBatcher",
    "StabilizedPointer",
    "LevelPreset",
    "level_to_pipeline",
    "create_stabilized_pointer",
    "describe_level",
    "stabilize_stroke",
    "stabilization_to_params",
]
