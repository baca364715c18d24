"""Core value types shared by the stabilization pipeline."""

import math
from dataclasses import dataclass
from enum import Enum


class DeviceKind(str, Enum):
    MOUSE = "mouse"
    TOUCH = "touch"
    PEN = "pen"

    @classmethod
    def parse(cls, value) -> "DeviceKind":
        """Map a platform pointer-type string to a DeviceKind.

        Anything unrecognised (including None) is treated as a mouse.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            return cls.MOUSE


class FilterKind(str, Enum):
    NOISE = "noise"
    KALMAN = "kalman"
    GAUSSIAN = "gaussian"
    STRING = "string"


@dataclass(frozen=True)
class PointerSample:
    """One pointer reading in element-local coordinates.

    Samples are never mutated; stages that move a sample build a new one
    with ``dataclasses.replace`` so pressure and device kind carry over.
    """
    x: float
    y: float
    pressure: float = 0.5
    device_kind: DeviceKind = DeviceKind.MOUSE

    def distance_to(self, other) -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def to_dict(self) -> dict:
        return {
            "x": self.x,
            "y": self.y,
            "pressure": self.pressure,
            "pointer_type": self.device_kind.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PointerSample":
        return cls(
            x=float(data["x"]),
            y=float(data["y"]),
            pressure=float(data.get("pressure", 0.5)),
            device_kind=DeviceKind.parse(data.get("pointer_type", data.get("device_kind"))),
        )
