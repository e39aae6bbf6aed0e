"""Sample ordering endpoints.

Implements:
- GET /api/v1/collections/{collection_id}/samples
  - Returns the collection's samples in rank order
- PATCH /api/v1/collections/{collection_id}/samples/order
  - Moves a batch of samples as a contiguous block (full recompute)
- PATCH /api/v1/collections/{collection_id}/samples/{code}/position
  - Moves one sample (single-move fast path)

Engine failures propagate as ``ReorderError`` and are rendered as
problem+json by ``sample_order.http.problem``.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter

from sample_order.logic.reorder_service import list_samples, move_sample, reorder_samples
from sample_order.models.sample import (
    PositionMapResponse,
    PositionUpdate,
    ReorderRequest,
    SampleList,
)

router = APIRouter(prefix="/api/v1/collections/{collection_id}/samples")
logger = logging.getLogger(__name__)


@router.get(
    "",
    summary="List samples in rank order",
    operation_id="listSamples",
    response_model=SampleList,
)
def get_samples(collection_id: str) -> SampleList:
    samples = list_samples(collection_id)
    return SampleList(collection_id=collection_id, samples=samples)


@router.patch(
    "/order",
    summary="Move a batch of samples to a target position",
    operation_id="reorderSamples",
    response_model=PositionMapResponse,
)
def patch_order(collection_id: str, body: ReorderRequest) -> PositionMapResponse:
    logger.info(
        "patch_order.request collection_id=%s target_position=%s codes=%s",
        collection_id,
        body.target_position,
        body.codes,
    )
    result = reorder_samples(collection_id, body.target_position, body.codes)
    return PositionMapResponse(
        collection_id=result.collection_id,
        positions=result.positions,
        changed=result.changed,
    )


@router.patch(
    "/{code}/position",
    summary="Move one sample to a new position",
    operation_id="moveSample",
    response_model=PositionMapResponse,
)
def patch_position(collection_id: str, code: str, body: PositionUpdate) -> PositionMapResponse:
    logger.info(
        "patch_position.request collection_id=%s code=%s position=%s",
        collection_id,
        code,
        body.position,
    )
    result = move_sample(collection_id, code, body.position)
    return PositionMapResponse(
        collection_id=result.collection_id,
        positions=result.positions,
        changed=result.changed,
    )
