"""Replaying recorded strokes through a live pointer."""

from typing import List

from .config import InkStableConfig, build_pointer
from .events import PointerEvent, TargetElement
from .scheduler import ManualFrameScheduler
from .types import PointerSample


def to_events(samples: List[PointerSample], per_frame: int) -> List[PointerEvent]:
    """Group samples into one pointer event per frame.

    Each event carries ``per_frame`` samples as coalesced sub-frame events,
    the way a browser delivers a fast pen movement, with the newest sample
    as the event's own position.
    """
    if per_frame <= 0:
        raise ValueError(f"per_frame must be > 0, got {per_frame}")

    events = []
    for start in range(0, len(samples), per_frame):
        chunk = [
            PointerEvent(s.x, s.y, s.pressure, s.device_kind.value)
            for s in samples[start:start + per_frame]
        ]
        primary = chunk[-1]
        events.append(PointerEvent(
            primary.client_x, primary.client_y, primary.pressure, primary.pointer_type,
            coalesced=chunk,
        ))
    return events


def replay(samples: List[PointerSample], config: InkStableConfig,
           events_per_frame: int = 0) -> List[PointerSample]:
    """Run a recorded stroke through a freshly built pointer and finish it.

    With ``events_per_frame`` the samples arrive as pointer events and one
    frame is pumped after each event; otherwise they are added directly.
    """
    scheduler = ManualFrameScheduler()
    pointer = build_pointer(config, scheduler=scheduler)

    if events_per_frame > 0:
        element = TargetElement()
        for event in to_events(samples, events_per_frame):
            pointer.add_pointer_event(event, element)
            scheduler.pump()
    else:
        pointer.add_points(samples)

    return pointer.finish()
