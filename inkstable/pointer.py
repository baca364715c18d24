"""Stabilized pointer input: buffers, pipeline and batching for one stroke at a time."""

import logging
from collections.abc import Sequence
from typing import Callable, List, Optional

from .events import PointerEvent, extract_samples
from .pipeline import (
    FilterPipeline,
    GaussianConfig,
    KalmanConfig,
    NoiseConfig,
    PipelineConfig,
    StringConfig,
)
from .scheduler import FrameBatcher, FrameScheduler, ManualFrameScheduler
from .types import FilterKind, PointerSample

logger = logging.getLogger("inkstable.pointer")

# Distance beyond which finish() appends the true pen-up position
END_POINT_EPSILON = 0.5

OnPointsFlush = Callable[[Sequence], None]


class BufferView(Sequence):
    """Read-only window onto a live point buffer."""

    def __init__(self, items: List[PointerSample]):
        self._items = items

    def __getitem__(self, index):
        return self._items[index]

    def __len__(self):
        return len(self._items)

    def __repr__(self):
        return f"BufferView({self._items!r})"


class StabilizedPointer:
    """Pointer input with a configurable stabilization pipeline.

    Filters are applied in the order they were added. Configuration
    methods return the pointer so they can be chained::

        pointer = (StabilizedPointer()
                   .with_noise_filter(1.5)
                   .with_kalman_filter(0.1, 0.5)
                   .with_gaussian_filter(5, 1.0)
                   .with_string_stabilization(5)
                   .with_frame_batch()
                   .on_flush(redraw))

    One stroke is handled at a time; ``finish()`` or ``reset()`` ends it.
    Configuration survives both.
    """

    def __init__(self, config: Optional[PipelineConfig] = None,
                 scheduler: Optional[FrameScheduler] = None,
                 frame_batch: bool = False):
        self._pipeline = FilterPipeline(config)
        self._raw: List[PointerSample] = []
        self._stabilized: List[PointerSample] = []
        self._raw_view = BufferView(self._raw)
        self._stabilized_view = BufferView(self._stabilized)
        self._last_output_index = 0
        self._flush_callback: Optional[OnPointsFlush] = None
        self._batcher = FrameBatcher(
            scheduler or ManualFrameScheduler(),
            self._drain_batch,
            enabled=frame_batch,
        )

    # Configuration

    @property
    def config(self) -> PipelineConfig:
        return self._pipeline.config

    @property
    def scheduler(self) -> FrameScheduler:
        return self._batcher.scheduler

    @property
    def frame_batch_enabled(self) -> bool:
        return self._batcher.enabled

    @property
    def filter_kinds(self) -> List[FilterKind]:
        return self.config.kinds

    def _configure(self, config: PipelineConfig) -> "StabilizedPointer":
        self._pipeline.reconfigure(config)
        return self

    def with_noise_filter(self, min_distance: float) -> "StabilizedPointer":
        """Drop samples that moved less than ``min_distance`` from the last accepted one."""
        return self._configure(self.config.with_filter(NoiseConfig(min_distance)))

    def with_kalman_filter(self, process_noise: float,
                           measurement_noise: float) -> "StabilizedPointer":
        """Predictive smoothing.

        Lower ``process_noise`` (Q) or higher ``measurement_noise`` (R)
        trusts the prediction more than the pen.
        """
        return self._configure(
            self.config.with_filter(KalmanConfig(process_noise, measurement_noise))
        )

    def with_gaussian_filter(self, size: int, sigma: float) -> "StabilizedPointer":
        """Weighted average over the last ``size // 2`` raw samples; ``size`` should be odd."""
        return self._configure(self.config.with_filter(GaussianConfig(size, sigma)))

    def with_string_stabilization(self, string_length: float) -> "StabilizedPointer":
        """Lazy brush with a dead zone of ``string_length`` around the drawn point."""
        return self._configure(self.config.with_filter(StringConfig(string_length)))

    def with_frame_batch(self) -> "StabilizedPointer":
        return self.set_frame_batch_enabled(True)

    def on_flush(self, callback: Optional[OnPointsFlush]) -> "StabilizedPointer":
        self._flush_callback = callback
        return self

    def update_noise_filter(self, min_distance: float) -> "StabilizedPointer":
        return self._configure(self.config.updated(FilterKind.NOISE, min_distance=min_distance))

    def update_kalman_filter(self, process_noise: float,
                             measurement_noise: float) -> "StabilizedPointer":
        return self._configure(self.config.updated(
            FilterKind.KALMAN,
            process_noise=process_noise,
            measurement_noise=measurement_noise,
        ))

    def update_gaussian_filter(self, size: int, sigma: float) -> "StabilizedPointer":
        return self._configure(self.config.updated(FilterKind.GAUSSIAN, size=size, sigma=sigma))

    def update_string_stabilization(self, string_length: float) -> "StabilizedPointer":
        return self._configure(
            self.config.updated(FilterKind.STRING, string_length=string_length)
        )

    def remove_filter(self, kind) -> "StabilizedPointer":
        return self._configure(self.config.without(kind))

    def set_filter_enabled(self, kind, enabled: bool) -> "StabilizedPointer":
        return self._configure(self.config.updated(kind, enabled=enabled))

    def set_frame_batch_enabled(self, enabled: bool) -> "StabilizedPointer":
        self._batcher.set_enabled(enabled)
        return self

    def has_filter(self, kind) -> bool:
        return self.config.get(kind) is not None

    def is_filter_enabled(self, kind) -> bool:
        f = self.config.get(kind)
        return f is not None and f.enabled

    # Point submission

    def add_pointer_event(self, event: PointerEvent, element, zoom: float = 1.0) -> None:
        """Feed a platform pointer event, including its coalesced sub-frame samples.

        With frame batching the samples are queued until the next frame;
        otherwise they are processed and flushed right away.
        """
        self._batcher.submit(extract_samples(event, element, zoom))

    def add_point(self, sample: PointerSample) -> Optional[PointerSample]:
        """Stabilize one sample synchronously.

        Returns the stabilized sample, or None if it was rejected.
        """
        self._batcher.flush_now()
        return self._process_one(sample)

    def add_points(self, samples) -> List[PointerSample]:
        """Stabilize several samples in order; returns only the accepted ones."""
        self._batcher.flush_now()
        return self._process(samples)

    def _process_one(self, sample: PointerSample) -> Optional[PointerSample]:
        stabilized = self._pipeline.apply(sample, self._raw_view)
        if stabilized is None:
            return None
        self._raw.append(sample)
        self._stabilized.append(stabilized)
        return stabilized

    def _process(self, samples) -> List[PointerSample]:
        results = []
        for sample in samples:
            stabilized = self._process_one(sample)
            if stabilized is not None:
                results.append(stabilized)
        return results

    def _drain_batch(self, samples: List[PointerSample]) -> None:
        if self._process(samples):
            self._emit_flush()

    def _emit_flush(self) -> None:
        if self._flush_callback is not None:
            self._flush_callback(self._stabilized_view)

    # Readout

    def get_new_points(self) -> List[PointerSample]:
        """Points stabilized since the previous call."""
        new_points = self._stabilized[self._last_output_index:]
        self._last_output_index = len(self._stabilized)
        return new_points

    def get_all_points(self) -> Sequence:
        return self._stabilized_view

    def get_raw_points(self) -> Sequence:
        return self._raw_view

    # Lifecycle

    def finish(self) -> List[PointerSample]:
        """End the stroke and return every stabilized point.

        Pending batched samples are processed first. If smoothing left the
        last point short of where the pen actually lifted, that raw position
        is appended. The pointer is reset afterwards.
        """
        pending = self._batcher.take_pending()
        if pending:
            self._process(pending)

        if self._raw and self._stabilized:
            last_raw = self._raw[-1]
            gap = last_raw.distance_to(self._stabilized[-1])
            if gap > END_POINT_EPSILON:
                logger.debug("Appending pen-up point, stabilized end lagged by %.2f", gap)
                self._stabilized.append(last_raw)

        result = list(self._stabilized)
        logger.debug("Stroke finished: %d raw, %d stabilized", len(self._raw), len(result))
        self.reset()
        return result

    def reset(self) -> None:
        """Discard the current stroke, keeping the filter configuration."""
        self._batcher.cancel()
        self._raw.clear()
        self._stabilized.clear()
        self._last_output_index = 0
        self._pipeline.reset()
