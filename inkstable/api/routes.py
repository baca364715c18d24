"""Stabilization endpoints."""

import asyncio
import functools
import logging

from fastapi import APIRouter, Depends, HTTPException, status

from ..replay import replay
from ..config import InkStableConfig
from ..presets import describe_level
from ..stroke import stabilization_to_params, stabilize_stroke
from .auth import verify_api_key
from .models import (
    OfflineStabilizeRequest,
    OfflineStabilizeResponse,
    PresetResponse,
    SampleModel,
    StabilizeRequest,
    StabilizeResponse,
)
from .settings import settings

logger = logging.getLogger("inkstable.api.routes")

router = APIRouter()


def _check_size(count: int):
    if count > settings.max_samples:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"Too many samples ({count}), limit is {settings.max_samples}",
        )


@router.post("/stabilize", response_model=StabilizeResponse)
async def stabilize(request: StabilizeRequest, api_key: str = Depends(verify_api_key)):
    """Stabilize a recorded stroke as if it had been drawn live.

    The stroke is finished at the end, so the last point is the true pen-up
    position.
    """
    _check_size(len(request.samples))
    if request.events_per_frame > settings.max_events_per_frame:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"events_per_frame must be <= {settings.max_events_per_frame}",
        )

    config = InkStableConfig()
    config.stabilization.level = request.level
    preset = describe_level(request.level)

    samples = [s.to_sample() for s in request.samples]

    # Offload to thread pool for CPU-bound work
    loop = asyncio.get_running_loop()
    points = await loop.run_in_executor(
        None, functools.partial(replay, samples, config, events_per_frame=request.events_per_frame)
    )
    logger.info("Stabilized %d samples at level %d -> %d points",
                len(samples), preset.level, len(points))

    return StabilizeResponse(
        points=[SampleModel.from_sample(p) for p in points],
        raw_count=len(samples),
        point_count=len(points),
        filters=preset.config.to_list(),
    )


@router.post("/stabilize/offline", response_model=OfflineStabilizeResponse)
async def stabilize_offline(request: OfflineStabilizeRequest,
                            api_key: str = Depends(verify_api_key)):
    """Smooth a complete stroke with a Gaussian window sized by ``strength``."""
    _check_size(len(request.points))
    size, sigma = stabilization_to_params(request.strength)
    loop = asyncio.get_running_loop()
    points = await loop.run_in_executor(
        None, stabilize_stroke, [p.to_sample() for p in request.points], size, sigma
    )
    return OfflineStabilizeResponse(
        points=[SampleModel.from_sample(p) for p in points],
        kernel_size=size,
        sigma=sigma,
    )


@router.get("/presets/{level}", response_model=PresetResponse)
async def get_preset(level: int, api_key: str = Depends(verify_api_key)):
    """Describe the filter stack used for a stabilization level."""
    return PresetResponse(**describe_level(level).to_dict())
