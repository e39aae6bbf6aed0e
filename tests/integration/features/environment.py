"""Behave environment hooks for reorder engine scenarios.

Scenarios run the engine in-process; no API or database is required.
"""

from __future__ import annotations

from typing import Any

from sample_order.logging_setup import configure_logging


def before_all(context: Any) -> None:  # pragma: no cover - executed by Behave
    configure_logging()


def before_scenario(context: Any, scenario: Any) -> None:  # pragma: no cover - executed by Behave
    context.samples = []
    context.positions = None
    context.error = None
