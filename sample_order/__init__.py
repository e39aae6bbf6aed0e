"""Sample order service package.

Exposes the pure reorder engine operations and a small FastAPI application
factory. Engine logic lives in `sample_order/logic/`, persistence in
`sample_order/logic/repository_samples.py` and HTTP handlers in
`sample_order/routes/`.
"""

from __future__ import annotations

from sample_order.logic.reorder_engine import full_recompute_move, incremental_shift, single_move
from sample_order.main import create_app

__all__ = ["create_app", "full_recompute_move", "incremental_shift", "single_move"]
