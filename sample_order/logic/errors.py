"""Typed failures raised by the reorder engine.

Each error carries a stable ``code`` string and a ``detail`` mapping so the
HTTP layer can build problem+json payloads without inspecting messages.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional


class ReorderError(Exception):
    """Base class for reorder engine failures."""

    code = "REORDER_ERROR"

    def __init__(self, message: str, detail: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail: Dict[str, Any] = dict(detail or {})


class OutOfRangeError(ReorderError):
    """A position argument lies outside ``[1, N]``."""

    code = "REORDER_POSITION_OUT_OF_RANGE"

    def __init__(self, field: str, value: int, size: int) -> None:
        super().__init__(
            f"{field}={value} is outside [1, {size}]",
            {"field": field, "value": value, "size": size},
        )
        self.field = field
        self.value = value
        self.size = size


class UnknownCodeError(ReorderError):
    """One or more moved codes are absent from the collection."""

    code = "REORDER_UNKNOWN_CODE"

    def __init__(self, codes: Iterable[str]) -> None:
        self.codes: List[str] = sorted(set(codes))
        super().__init__(
            "unknown sample code(s): " + ", ".join(self.codes),
            {"codes": self.codes},
        )


class InvariantViolationError(ReorderError):
    """The collection is not a dense, duplicate-free 1..N ranking."""

    code = "REORDER_INVARIANT_VIOLATION"

    def __init__(
        self,
        *,
        duplicate_codes: Iterable[str] = (),
        duplicate_positions: Iterable[int] = (),
        missing_positions: Iterable[int] = (),
        unexpected_positions: Iterable[int] = (),
        missing_codes: Iterable[str] = (),
        unexpected_codes: Iterable[str] = (),
    ) -> None:
        self.duplicate_codes = sorted(set(duplicate_codes))
        self.duplicate_positions = sorted(set(duplicate_positions))
        self.missing_positions = sorted(set(missing_positions))
        self.unexpected_positions = sorted(set(unexpected_positions))
        self.missing_codes = sorted(set(missing_codes))
        self.unexpected_codes = sorted(set(unexpected_codes))
        parts = []
        if self.duplicate_codes:
            parts.append(f"duplicate codes {self.duplicate_codes}")
        if self.duplicate_positions:
            parts.append(f"duplicate positions {self.duplicate_positions}")
        if self.missing_positions:
            parts.append(f"missing positions {self.missing_positions}")
        if self.unexpected_positions:
            parts.append(f"unexpected positions {self.unexpected_positions}")
        if self.missing_codes:
            parts.append(f"codes missing from map {self.missing_codes}")
        if self.unexpected_codes:
            parts.append(f"codes not in collection {self.unexpected_codes}")
        super().__init__(
            "collection positions are not contiguous: " + "; ".join(parts),
            {
                "duplicate_codes": self.duplicate_codes,
                "duplicate_positions": self.duplicate_positions,
                "missing_positions": self.missing_positions,
                "unexpected_positions": self.unexpected_positions,
                "missing_codes": self.missing_codes,
                "unexpected_codes": self.unexpected_codes,
            },
        )


__all__ = [
    "ReorderError",
    "OutOfRangeError",
    "UnknownCodeError",
    "InvariantViolationError",
]
