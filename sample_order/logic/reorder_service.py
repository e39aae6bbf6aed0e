"""Transactional reorder operations over stored sample collections.

Each operation loads the collection snapshot, runs the pure reorder engine
and commits the resulting map inside one database transaction, so two
callers reordering the same collection are serialized by the store.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence
import logging

from sqlalchemy.engine import Engine

from sample_order.config import AppConfig, load_config
from sample_order.db.base import transaction
from sample_order.logic.position_invariants import changed_codes
from sample_order.logic.reorder_engine import full_recompute_move, single_move
from sample_order.logic.repository_samples import commit_positions, load_samples
from sample_order.models.sample import Sample

logger = logging.getLogger(__name__)


@dataclass
class ReorderResult:
    collection_id: str
    positions: Dict[str, int]
    changed: List[str] = field(default_factory=list)


def list_samples(collection_id: str, *, engine: Optional[Engine] = None) -> List[Sample]:
    with transaction(engine) as conn:
        return load_samples(conn, collection_id)


def reorder_samples(
    collection_id: str,
    target_position: int,
    codes: Sequence[str],
    *,
    engine: Optional[Engine] = None,
    config: Optional[AppConfig] = None,
) -> ReorderResult:
    """Move ``codes`` as a block to ``target_position`` and persist the result."""
    cfg = config or load_config()
    with transaction(engine) as conn:
        snapshot = load_samples(conn, collection_id, for_update=True)
        positions = full_recompute_move(snapshot, target_position, codes)
        changed = changed_codes(snapshot, positions)
        if changed:
            commit_positions(conn, collection_id, positions, offset=cfg.reorder.staging_offset)
    logger.info(
        "reorder_samples.result collection_id=%s target=%s codes=%s changed=%s",
        collection_id,
        target_position,
        list(codes),
        changed,
    )
    return ReorderResult(collection_id=collection_id, positions=positions, changed=changed)


def move_sample(
    collection_id: str,
    code: str,
    new_position: int,
    *,
    engine: Optional[Engine] = None,
    config: Optional[AppConfig] = None,
) -> ReorderResult:
    """Move a single sample to ``new_position`` and persist the result."""
    cfg = config or load_config()
    with transaction(engine) as conn:
        snapshot = load_samples(conn, collection_id, for_update=True)
        positions = single_move(snapshot, code, new_position)
        changed = changed_codes(snapshot, positions)
        if changed:
            commit_positions(conn, collection_id, positions, offset=cfg.reorder.staging_offset)
    logger.info(
        "move_sample.result collection_id=%s code=%s new_position=%s changed=%s",
        collection_id,
        code,
        new_position,
        changed,
    )
    return ReorderResult(collection_id=collection_id, positions=positions, changed=changed)


__all__ = ["ReorderResult", "list_samples", "reorder_samples", "move_sample"]
