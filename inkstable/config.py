"""Configuration management for InkStable."""

import os
from dataclasses import dataclass, field
from typing import List, Optional

import yaml

from .pipeline import InvalidFilterConfig, PipelineConfig
from .pointer import StabilizedPointer
from .presets import describe_level
from .scheduler import AsyncioFrameScheduler, FrameScheduler


class ConfigError(ValueError):
    """Raised for configuration files that cannot be turned into a pointer."""


@dataclass
class StabilizationConfig:
    level: int = 0
    # Explicit filter entries; when set they replace the level preset
    filters: Optional[List[dict]] = None


@dataclass
class FrameConfig:
    batch: Optional[bool] = None  # None: the level preset decides
    fps: float = 60.0


@dataclass
class LoggingConfig:
    level: str = "INFO"
    file: str = ""
    max_size_mb: int = 10
    backup_count: int = 3


@dataclass
class InkStableConfig:
    stabilization: StabilizationConfig = field(default_factory=StabilizationConfig)
    frame: FrameConfig = field(default_factory=FrameConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_yaml(cls, path: str) -> "InkStableConfig":
        """Load configuration from a YAML file."""
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict) -> "InkStableConfig":
        config = cls()

        if "stabilization" in data:
            s = data["stabilization"] or {}
            filters = s.get("filters")
            if filters is not None and not isinstance(filters, list):
                raise ConfigError("stabilization.filters must be a list")
            config.stabilization = StabilizationConfig(
                level=int(s.get("level", 0)),
                filters=filters,
            )

        if "frame" in data:
            fr = data["frame"] or {}
            config.frame = FrameConfig(
                batch=fr.get("batch"),
                fps=float(fr.get("fps", 60.0)),
            )

        if "logging" in data:
            lg = data["logging"] or {}
            config.logging = LoggingConfig(
                level=lg.get("level", "INFO"),
                file=lg.get("file", ""),
                max_size_mb=lg.get("max_size_mb", 10),
                backup_count=lg.get("backup_count", 3),
            )

        return config

    @classmethod
    def load(cls, path: Optional[str] = None) -> "InkStableConfig":
        """Load config from path, falling back to defaults."""
        search_paths = [
            path,
            os.environ.get("INKSTABLE_CONFIG"),
            os.path.expanduser("~/.inkstable/config.yaml"),
            "/etc/inkstable/config.yaml",
        ]
        for p in search_paths:
            if p and os.path.isfile(p):
                return cls.from_yaml(p)
        return cls()


def build_pointer(config: InkStableConfig,
                  scheduler: Optional[FrameScheduler] = None) -> StabilizedPointer:
    """Construct a pointer from a loaded configuration.

    Without an explicit scheduler, batched frames tick on the running asyncio
    loop at ``frame.fps``.
    """
    preset = describe_level(config.stabilization.level)
    pipeline_config = preset.config
    frame_batch = preset.frame_batch

    if config.stabilization.filters is not None:
        try:
            pipeline_config = PipelineConfig.from_list(config.stabilization.filters)
        except InvalidFilterConfig as e:
            raise ConfigError(str(e))

    if config.frame.batch is not None:
        frame_batch = bool(config.frame.batch)

    if scheduler is None:
        scheduler = AsyncioFrameScheduler(fps=config.frame.fps)

    return StabilizedPointer(pipeline_config, scheduler=scheduler, frame_batch=frame_batch)
