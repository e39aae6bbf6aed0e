"""Configuration utilities for the sample order service.

This module loads application configuration with the following rules:
- Primary source: `sample_order_config.json` at the project root.
- Overrides: environment variables, then optional text files under `config/`.
- Validation: Pydantic models enforce required fields and value constraints.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError, field_validator


CONFIG_DIR = Path("config")
ROOT_CONFIG = Path("sample_order_config.json")
logger = logging.getLogger(__name__)


def _read_config_file(rel_path: str) -> Optional[str]:
    path = CONFIG_DIR / rel_path
    try:
        if path.exists():
            return path.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Failed to read override %s: %s", path, e)
        return None
    return None


def _env(key: str, default: Optional[str] = None) -> Optional[str]:
    return os.environ.get(key, default)


def _truthy(text: object) -> bool:
    return str(text).strip().lower() in {"1", "true", "yes", "on"}


class DatabaseConfig(BaseModel):
    dsn: str

    @field_validator("dsn")
    @classmethod
    def dsn_must_be_non_empty(cls, v: str) -> str:
        if not isinstance(v, str) or not v.strip():
            raise ValueError("database.dsn must be a non-empty string")
        return v


class ReorderConfig(BaseModel):
    # Phase-one offset used to vacate the unique position space before writing
    staging_offset: int = Field(default=1000, gt=0)
    auto_apply_migrations: bool = Field(default=True)


class AppConfig(BaseModel):
    database: DatabaseConfig
    reorder: ReorderConfig


def _read_json_file(path: Path) -> dict:
    try:
        if path.exists():
            return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.error("Failed to read JSON config %s: %s", path, e)
    return {}


def load_config() -> AppConfig:
    """Load configuration with validation.

    Precedence (highest first):
    1) Environment variables
    2) Text files in `config/` (optional)
    3) sample_order_config.json at project root
    4) Defaults suitable for local development
    """

    base = _read_json_file(ROOT_CONFIG)

    def _base(path: str, default: Optional[str] = None) -> Optional[str]:
        cur: object = base
        for key in path.split("."):
            if not isinstance(cur, dict) or key not in cur:
                return default
            cur = cur[key]
        return str(cur) if cur is not None else default

    dsn = (
        _env("TEST_DATABASE_URL")
        or _env("DATABASE_URL")
        or _read_config_file("database.url")
        or _base("database.dsn")
        or "sqlite+pysqlite:///:memory:"
    )
    offset_text = (
        _env("REORDER_STAGING_OFFSET")
        or _read_config_file("reorder.staging_offset")
        or _base("reorder.staging_offset", "1000")
    )
    migrations_text = (
        _env("AUTO_APPLY_MIGRATIONS")
        or _read_config_file("reorder.auto_apply_migrations")
        or _base("reorder.auto_apply_migrations", "true")
    )

    try:
        cfg = AppConfig(
            database=DatabaseConfig(dsn=dsn),
            reorder=ReorderConfig(
                staging_offset=int(str(offset_text).strip()),
                auto_apply_migrations=_truthy(migrations_text),
            ),
        )
        return cfg
    except (PydanticValidationError, ValueError) as e:
        logger.error("Invalid application configuration: %s", e)
        raise


__all__ = [
    "AppConfig",
    "DatabaseConfig",
    "ReorderConfig",
    "load_config",
]
