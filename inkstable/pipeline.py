"""Filter configuration values and the ordered pipeline that applies them."""

import logging
from dataclasses import asdict, dataclass, field, replace
from typing import ClassVar, Dict, List, Optional, Sequence, Tuple, Union

from .filters import Stage, build_stage
from .types import FilterKind, PointerSample

logger = logging.getLogger("inkstable.pipeline")


class InvalidFilterConfig(ValueError):
    """Raised when a filter is configured with out-of-range parameters."""


@dataclass(frozen=True)
class NoiseConfig:
    min_distance: float
    enabled: bool = True
    kind: ClassVar[FilterKind] = FilterKind.NOISE

    def __post_init__(self):
        if self.min_distance < 0:
            raise InvalidFilterConfig(f"min_distance must be >= 0, got {self.min_distance}")


@dataclass(frozen=True)
class KalmanConfig:
    process_noise: float
    measurement_noise: float
    enabled: bool = True
    kind: ClassVar[FilterKind] = FilterKind.KALMAN

    def __post_init__(self):
        if self.process_noise < 0:
            raise InvalidFilterConfig(f"process_noise must be >= 0, got {self.process_noise}")
        if self.measurement_noise <= 0:
            raise InvalidFilterConfig(
                f"measurement_noise must be > 0, got {self.measurement_noise}"
            )


@dataclass(frozen=True)
class GaussianConfig:
    size: int
    sigma: float
    enabled: bool = True
    kind: ClassVar[FilterKind] = FilterKind.GAUSSIAN

    def __post_init__(self):
        if self.size < 0:
            raise InvalidFilterConfig(f"size must be >= 0, got {self.size}")
        if self.size > 1 and self.sigma <= 0:
            raise InvalidFilterConfig(f"sigma must be > 0, got {self.sigma}")


@dataclass(frozen=True)
class StringConfig:
    string_length: float
    enabled: bool = True
    kind: ClassVar[FilterKind] = FilterKind.STRING

    def __post_init__(self):
        if self.string_length < 0:
            raise InvalidFilterConfig(f"string_length must be >= 0, got {self.string_length}")


FilterConfig = Union[NoiseConfig, KalmanConfig, GaussianConfig, StringConfig]

CONFIG_TYPES: Dict[FilterKind, type] = {
    FilterKind.NOISE: NoiseConfig,
    FilterKind.KALMAN: KalmanConfig,
    FilterKind.GAUSSIAN: GaussianConfig,
    FilterKind.STRING: StringConfig,
}


@dataclass(frozen=True)
class PipelineConfig:
    """Ordered, immutable set of filter configurations.

    Each filter kind appears at most once. Adding a kind that is already
    present replaces its entry in place, keeping its position.
    """
    filters: Tuple[FilterConfig, ...] = field(default_factory=tuple)

    @property
    def kinds(self) -> List[FilterKind]:
        return [f.kind for f in self.filters]

    @property
    def has_enabled(self) -> bool:
        return any(f.enabled for f in self.filters)

    def get(self, kind) -> Optional[FilterConfig]:
        kind = FilterKind(kind)
        for f in self.filters:
            if f.kind == kind:
                return f
        return None

    def with_filter(self, config: FilterConfig) -> "PipelineConfig":
        if self.get(config.kind) is None:
            return PipelineConfig(self.filters + (config,))
        return PipelineConfig(tuple(config if f.kind == config.kind else f for f in self.filters))

    def without(self, kind) -> "PipelineConfig":
        kind = FilterKind(kind)
        return PipelineConfig(tuple(f for f in self.filters if f.kind != kind))

    def updated(self, kind, **changes) -> "PipelineConfig":
        """Return a copy with one filter's fields changed; absent kinds are left alone."""
        current = self.get(kind)
        if current is None:
            return self
        return self.with_filter(replace(current, **changes))

    def to_list(self) -> List[dict]:
        result = []
        for f in self.filters:
            entry = {"type": f.kind.value}
            entry.update(asdict(f))
            result.append(entry)
        return result

    @classmethod
    def from_list(cls, entries: Sequence[dict]) -> "PipelineConfig":
        """Build a config from ``[{"type": "noise", "min_distance": 1.5}, ...]``."""
        config = cls()
        for entry in entries:
            params = dict(entry)
            try:
                kind = FilterKind(params.pop("type"))
            except (KeyError, ValueError):
                raise InvalidFilterConfig(f"Unknown filter entry: {entry!r}")
            try:
                config = config.with_filter(CONFIG_TYPES[kind](**params))
            except TypeError as e:
                raise InvalidFilterConfig(f"Bad parameters for {kind.value} filter: {e}")
        return config


class PipelineBuilder:
    """Fluent construction of a PipelineConfig.

    >>> config = PipelineBuilder().with_noise(1.5).with_kalman(0.1, 0.5).build()
    """

    def __init__(self, config: Optional[PipelineConfig] = None):
        self._config = config or PipelineConfig()

    def with_noise(self, min_distance: float) -> "PipelineBuilder":
        self._config = self._config.with_filter(NoiseConfig(min_distance))
        return self

    def with_kalman(self, process_noise: float, measurement_noise: float) -> "PipelineBuilder":
        self._config = self._config.with_filter(KalmanConfig(process_noise, measurement_noise))
        return self

    def with_gaussian(self, size: int, sigma: float) -> "PipelineBuilder":
        self._config = self._config.with_filter(GaussianConfig(size, sigma))
        return self

    def with_string(self, string_length: float) -> "PipelineBuilder":
        self._config = self._config.with_filter(StringConfig(string_length))
        return self

    def build(self) -> PipelineConfig:
        return self._config


class FilterPipeline:
    """Applies the enabled stages of a PipelineConfig in order."""

    def __init__(self, config: Optional[PipelineConfig] = None):
        self.config = PipelineConfig()
        self._stages: List[Tuple[FilterConfig, Stage]] = []
        self._any_enabled = False
        self.reconfigure(config or PipelineConfig())

    def reconfigure(self, config: PipelineConfig) -> None:
        """Switch to a new configuration.

        Stages whose kind survives keep their stroke state; removed kinds
        lose theirs.
        """
        existing = {stage.kind: stage for _, stage in self._stages}
        stages = []
        for f in config.filters:
            stage = existing.get(f.kind)
            if stage is None:
                stage = build_stage(f)
            else:
                stage.configure(f)
            stages.append((f, stage))

        self.config = config
        self._stages = stages
        self._any_enabled = config.has_enabled
        logger.debug("Pipeline configured: %s", config.to_list())

    @property
    def passthrough(self) -> bool:
        return not self._any_enabled

    def apply(self, sample: PointerSample,
              history: Sequence[PointerSample]) -> Optional[PointerSample]:
        """Run one raw sample through the enabled stages.

        Returns the stabilized sample, or None when a stage rejected it.
        ``history`` holds the accepted raw samples of the stroke so far.
        """
        if not self._any_enabled:
            return sample

        working = sample
        for f, stage in self._stages:
            if not f.enabled:
                continue
            working = stage.apply(working, sample, history)
            if working is None:
                return None
        return working

    def reset(self) -> None:
        for _, stage in self._stages:
            stage.reset()
