"""Request/response models."""

from typing import List

from pydantic import BaseModel, Field

from ..types import DeviceKind, PointerSample


class SampleModel(BaseModel):
    """A single pointer sample in element-local coordinates."""
    x: float
    y: float
    pressure: float = Field(default=0.5, ge=0.0, le=1.0)
    pointer_type: str = "mouse"

    def to_sample(self) -> PointerSample:
        return PointerSample(self.x, self.y, self.pressure, DeviceKind.parse(self.pointer_type))

    @classmethod
    def from_sample(cls, sample: PointerSample) -> "SampleModel":
        return cls(
            x=sample.x,
            y=sample.y,
            pressure=sample.pressure,
            pointer_type=sample.device_kind.value,
        )


class StabilizeRequest(BaseModel):
    """Replay a stroke through the live stabilizer."""
    level: int = Field(default=50, description="Stabilization level 0-100 (clamped)")
    samples: List[SampleModel]
    events_per_frame: int = Field(
        default=0, ge=0,
        description="Deliver samples as coalesced events, N per frame (0 = direct)",
    )

    class Config:
        json_schema_extra = {
            "example": {
                "level": 50,
                "samples": [
                    {"x": 0.0, "y": 0.0, "pressure": 0.4, "pointer_type": "pen"},
                    {"x": 4.0, "y": 1.5, "pressure": 0.5, "pointer_type": "pen"},
                ],
                "events_per_frame": 4,
            }
        }


class StabilizeResponse(BaseModel):
    points: List[SampleModel]
    raw_count: int
    point_count: int
    filters: List[dict]


class OfflineStabilizeRequest(BaseModel):
    """Smooth a finished stroke in one pass."""
    strength: float = Field(default=0.5, ge=0.0, le=1.0)
    points: List[SampleModel]


class OfflineStabilizeResponse(BaseModel):
    points: List[SampleModel]
    kernel_size: int
    sigma: float


class PresetResponse(BaseModel):
    level: int
    frame_batch: bool
    filters: List[dict]
