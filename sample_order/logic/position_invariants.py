"""Shared validation helpers for the contiguous 1..N ranking invariant.

Used by the reorder engine to refuse malformed snapshots, and by the
repository layer to refuse incomplete position maps before writing.
"""

from __future__ import annotations

from collections import Counter
from typing import Dict, Iterable, List, Mapping, Sequence, Tuple
import logging

from sample_order.logic.errors import InvariantViolationError, OutOfRangeError
from sample_order.models.sample import Sample

logger = logging.getLogger(__name__)


def _check_dense(pairs: Sequence[Tuple[str, int]]) -> int:
    codes = Counter(code for code, _ in pairs)
    positions = Counter(pos for _, pos in pairs)
    size = len(pairs)
    expected = set(range(1, size + 1))
    duplicate_codes = [c for c, n in codes.items() if n > 1]
    duplicate_positions = [p for p, n in positions.items() if n > 1]
    missing = expected - set(positions)
    unexpected = set(positions) - expected
    if duplicate_codes or duplicate_positions or missing or unexpected:
        logger.info(
            "position_invariants.violation size=%s duplicate_codes=%s duplicate_positions=%s missing=%s unexpected=%s",
            size,
            duplicate_codes,
            duplicate_positions,
            sorted(missing),
            sorted(unexpected),
        )
        raise InvariantViolationError(
            duplicate_codes=duplicate_codes,
            duplicate_positions=duplicate_positions,
            missing_positions=missing,
            unexpected_positions=unexpected,
        )
    return size


def validate_collection(items: Iterable[Sample]) -> int:
    """Return N after checking positions are exactly ``{1..N}`` with unique codes.

    Raises ``InvariantViolationError`` describing every defect found.
    """
    return _check_dense([(str(s.code), int(s.position)) for s in items])


def validate_position_map(positions: Mapping[str, int]) -> int:
    """Return N after checking a complete map covers ranks ``{1..N}`` once each."""
    return _check_dense([(str(c), int(p)) for c, p in positions.items()])


def require_in_range(field: str, value: int, size: int) -> int:
    if not 1 <= int(value) <= size:
        logger.info("position_invariants.out_of_range field=%s value=%s size=%s", field, value, size)
        raise OutOfRangeError(field, int(value), size)
    return int(value)


def clamp_position(value: int, size: int) -> int:
    """Clamp ``value`` into ``[1, size]``; an empty collection clamps to 1."""
    return max(1, min(int(value), max(size, 1)))


def snapshot_positions(items: Iterable[Sample]) -> Dict[str, int]:
    return {str(s.code): int(s.position) for s in items}


def apply_positions(items: Iterable[Sample], positions: Mapping[str, int]) -> List[Sample]:
    """Return new samples with ``positions`` applied, ordered by rank.

    Codes absent from the map keep their current position. Inputs are not
    mutated.
    """
    updated = [
        Sample(code=s.code, position=int(positions.get(s.code, s.position)))
        for s in items
    ]
    return sorted(updated, key=lambda s: (s.position, s.code))


def changed_codes(items: Iterable[Sample], positions: Mapping[str, int]) -> List[str]:
    """Codes whose mapped position differs from their current one, in new rank order."""
    changed = [
        s.code for s in items if s.code in positions and int(positions[s.code]) != int(s.position)
    ]
    return sorted(changed, key=lambda c: (positions[c], c))


__all__ = [
    "validate_collection",
    "validate_position_map",
    "require_in_range",
    "clamp_position",
    "snapshot_positions",
    "apply_positions",
    "changed_codes",
]
