"""Positional reorder engine for sample collections.

Computes new 1-based positions for a collection when one or more samples
move, keeping the collection's ranks a dense ``{1..N}`` sequence. All
functions are pure: inputs are never mutated and every call returns a new
position map owned by the caller. Persisting the map is the caller's job
(see ``sample_order.logic.reorder_service``).

Two algorithms are offered:

- ``full_recompute_move`` removes a batch of samples, reinserts them as a
  contiguous block at the target index and renumbers the whole collection.
  This is the single source of truth for batch and repeated moves.
- ``incremental_shift`` adjusts only the samples inside the window between
  an old and a new position. ``single_move`` wraps it as a fast path for
  exactly one sample moving.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Sequence
import logging

from sample_order.logic.errors import UnknownCodeError
from sample_order.logic.position_invariants import (
    clamp_position,
    require_in_range,
    snapshot_positions,
    validate_collection,
)
from sample_order.models.sample import Sample

logger = logging.getLogger(__name__)

# Step applied to a window sample on first sight vs. when already staged
_PROVISIONAL_STEP = 2
_FINAL_STEP = 1


def incremental_shift(
    items: Iterable[Sample],
    staged_map: Mapping[str, int],
    old_position: int,
    new_position: int,
) -> Dict[str, int]:
    """Return ``staged_map`` plus shifts for samples in the move window.

    - Moving down (``new_position < old_position``) selects positions in
      ``[new_position, old_position)`` and shifts them towards the tail.
    - Moving up selects positions in ``(old_position, new_position]`` and
      shifts them towards the head.
    - A window sample not yet staged is recorded at ``position ± 2``; one
      already staged is overwritten with ``position ± 1``.

    The moved sample itself is not written; the caller adds it. Both
    positions must lie in ``[1, N]`` (``OutOfRangeError`` otherwise).
    """
    snapshot: List[Sample] = list(items)
    size = validate_collection(snapshot)
    old = require_in_range("old_position", old_position, size)
    new = require_in_range("new_position", new_position, size)

    staged: Dict[str, int] = dict(staged_map)
    moving_down = new < old
    if moving_down:
        window = [s for s in snapshot if new <= s.position < old]
    else:
        window = [s for s in snapshot if old < s.position <= new]
    sign = 1 if moving_down else -1

    for sample in sorted(window, key=lambda s: s.position):
        if sample.code in staged:
            staged[sample.code] = sample.position + sign * _FINAL_STEP
        else:
            staged[sample.code] = sample.position + sign * _PROVISIONAL_STEP

    logger.info(
        "incremental_shift.result old=%s new=%s moving_down=%s window=%s staged_count=%s",
        old,
        new,
        moving_down,
        [s.code for s in window],
        len(staged),
    )
    return staged


def single_move(items: Iterable[Sample], code: str, new_position: int) -> Dict[str, int]:
    """Move one sample to ``new_position`` and return the complete position map.

    Seeds the staged map with every current position so each window sample
    takes the final single step, then records the moved sample explicitly.
    """
    snapshot: List[Sample] = list(items)
    size = validate_collection(snapshot)
    current = snapshot_positions(snapshot)
    if code not in current:
        logger.info("single_move.unknown_code code=%s", code)
        raise UnknownCodeError([code])
    new = require_in_range("new_position", new_position, size)

    staged = incremental_shift(snapshot, current, current[code], new)
    staged[code] = new
    return staged


def full_recompute_move(
    items: Iterable[Sample],
    target_position: int,
    moved_codes: Sequence[str],
) -> Dict[str, int]:
    """Relocate ``moved_codes`` as a block starting at ``target_position``.

    Returns a complete map covering every sample. The relative order of
    ``moved_codes`` is preserved and duplicates collapse to their first
    occurrence. ``target_position`` is clamped into ``[1, N]`` and the block
    never overhangs the tail. Any unknown code fails the whole call with
    ``UnknownCodeError`` and no map.
    """
    snapshot: List[Sample] = list(items)
    size = validate_collection(snapshot)

    ordered_codes: List[str] = list(dict.fromkeys(str(c) for c in moved_codes))
    known = {s.code for s in snapshot}
    unknown = [c for c in ordered_codes if c not in known]
    if unknown:
        logger.info("full_recompute_move.unknown_codes codes=%s", unknown)
        raise UnknownCodeError(unknown)

    moving = set(ordered_codes)
    remaining = sorted((s for s in snapshot if s.code not in moving), key=lambda s: s.position)
    working: List[str] = [s.code for s in remaining]

    target = clamp_position(target_position, size)
    insert_at = min(target - 1, len(working))
    for code in ordered_codes:
        working.insert(insert_at, code)
        insert_at += 1

    positions: Dict[str, int] = {code: idx + 1 for idx, code in enumerate(working)}
    logger.info(
        "full_recompute_move.result size=%s target_requested=%s target=%s moved=%s after=%s",
        size,
        target_position,
        target,
        ordered_codes,
        working,
    )
    return positions


__all__ = ["incremental_shift", "single_move", "full_recompute_move"]
