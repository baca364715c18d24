"""Platform-neutral pointer events and sample extraction."""

from dataclasses import dataclass, field
from typing import List

from .types import DeviceKind, PointerSample


@dataclass
class BoundingRect:
    left: float = 0.0
    top: float = 0.0
    width: float = 0.0
    height: float = 0.0


@dataclass
class TargetElement:
    """The surface receiving pointer input, positioned in client coordinates."""
    left: float = 0.0
    top: float = 0.0
    width: float = 0.0
    height: float = 0.0

    def get_bounding_client_rect(self) -> BoundingRect:
        return BoundingRect(self.left, self.top, self.width, self.height)


@dataclass
class PointerEvent:
    """A pointer event as delivered by the host toolkit.

    ``coalesced`` holds the sub-frame events merged into this one, oldest
    first, when the platform provides them.
    """
    client_x: float
    client_y: float
    pressure: float = 0.5
    pointer_type: str = "mouse"
    coalesced: List["PointerEvent"] = field(default_factory=list)

    def get_coalesced_events(self) -> List["PointerEvent"]:
        return self.coalesced


def client_to_local(client_x: float, client_y: float, rect, pressure: float,
                    device_kind: DeviceKind, zoom: float) -> PointerSample:
    return PointerSample(
        x=(client_x - rect.left) / zoom,
        y=(client_y - rect.top) / zoom,
        pressure=pressure,
        device_kind=device_kind,
    )


def extract_samples(event, element, zoom: float = 1.0) -> List[PointerSample]:
    """Convert a pointer event into element-local samples.

    Uses the coalesced events when the platform supplies any, otherwise the
    event itself. Always returns at least one sample.
    """
    if zoom <= 0:
        raise ValueError(f"zoom must be > 0, got {zoom}")

    rect = element.get_bounding_client_rect()
    get_coalesced = getattr(event, "get_coalesced_events", None)
    coalesced = (get_coalesced() if get_coalesced else None) or []
    source = coalesced or [event]

    return [
        client_to_local(
            e.client_x, e.client_y, rect, e.pressure,
            DeviceKind.parse(e.pointer_type), zoom,
        )
        for e in source
    ]
