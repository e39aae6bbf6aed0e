"""Sample data access helpers.

These functions encapsulate SQL for loading a collection snapshot and
writing back a complete position map, keeping the reorder engine and route
handlers free of persistence details. Every function takes the caller's
connection so load, compute and commit share one transaction.
"""

from __future__ import annotations

from typing import Iterable, List, Mapping
import logging

from sqlalchemy import text as sql_text
from sqlalchemy.engine import Connection

from sample_order.logic.errors import InvariantViolationError
from sample_order.logic.position_invariants import validate_position_map
from sample_order.models.sample import Sample

logger = logging.getLogger(__name__)


def load_samples(conn: Connection, collection_id: str, *, for_update: bool = False) -> List[Sample]:
    """Return every sample in ``collection_id`` ordered by position then code.

    With ``for_update`` the rows are locked for the rest of the transaction
    on PostgreSQL; other dialects ignore the flag.
    """
    sql = "SELECT code, position FROM sample WHERE collection_id = :cid ORDER BY position ASC, code ASC"
    dialect = (getattr(conn.dialect, "name", "") or "").lower()
    if for_update and dialect == "postgresql":
        sql += " FOR UPDATE"
    rows = conn.execute(sql_text(sql), {"cid": collection_id}).fetchall()
    return [Sample(code=str(r[0]), position=int(r[1])) for r in rows]


def collection_exists(conn: Connection, collection_id: str) -> bool:
    row = conn.execute(
        sql_text("SELECT COUNT(*) FROM sample WHERE collection_id = :cid"),
        {"cid": collection_id},
    ).fetchone()
    return bool(row and int(row[0]) > 0)


def insert_samples(conn: Connection, collection_id: str, samples: Iterable[Sample]) -> int:
    """Insert samples for a collection; returns rows inserted."""
    count = 0
    for s in samples:
        conn.execute(
            sql_text("INSERT INTO sample (collection_id, code, position) VALUES (:cid, :code, :pos)"),
            {"cid": collection_id, "code": s.code, "pos": int(s.position)},
        )
        count += 1
    return count


def commit_positions(
    conn: Connection,
    collection_id: str,
    positions: Mapping[str, int],
    *,
    offset: int,
) -> int:
    """Persist a complete position map for ``collection_id``; returns rows written.

    Two-phase write to avoid collisions on (collection_id, position):
    phase 1 shifts every row past the live range, phase 2 writes the final
    contiguous values. The map must cover every stored code exactly once.
    """
    stored = {
        str(r[0])
        for r in conn.execute(
            sql_text("SELECT code FROM sample WHERE collection_id = :cid"),
            {"cid": collection_id},
        ).fetchall()
    }
    if set(positions) != stored:
        logger.info(
            "commit_positions.incomplete_map collection_id=%s missing=%s extra=%s",
            collection_id,
            sorted(stored - set(positions)),
            sorted(set(positions) - stored),
        )
        raise InvariantViolationError(
            missing_codes=stored - set(positions),
            unexpected_codes=set(positions) - stored,
        )
    size = validate_position_map(positions)

    shift = max(int(offset), size + 1)
    conn.execute(
        sql_text("UPDATE sample SET position = position + :shift WHERE collection_id = :cid"),
        {"shift": shift, "cid": collection_id},
    )
    written = 0
    for code, pos in positions.items():
        conn.execute(
            sql_text("UPDATE sample SET position = :pos WHERE collection_id = :cid AND code = :code"),
            {"pos": int(pos), "cid": collection_id, "code": code},
        )
        written += 1
    logger.info("commit_positions.result collection_id=%s written=%s shift=%s", collection_id, written, shift)
    return written


__all__ = [
    "load_samples",
    "collection_exists",
    "insert_samples",
    "commit_positions",
]
