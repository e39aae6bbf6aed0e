"""Architectural tests for the sample order service.

All checks use static filesystem/AST inspection to avoid import-time side
effects.
"""

from __future__ import annotations

import ast
from pathlib import Path
from typing import Optional

import pytest


PROJECT_ROOT = Path(__file__).resolve().parents[2]
PKG_DIR = PROJECT_ROOT / "sample_order"
LOGIC_DIR = PKG_DIR / "logic"
MODELS_DIR = PKG_DIR / "models"

# Modules that make up the pure engine and must stay free of I/O stacks
PURE_MODULES = [
    LOGIC_DIR / "reorder_engine.py",
    LOGIC_DIR / "position_invariants.py",
    LOGIC_DIR / "errors.py",
    MODELS_DIR / "sample.py",
]
FORBIDDEN_IN_PURE = {"sqlalchemy", "fastapi", "starlette", "httpx", "os", "sample_order.db", "sample_order.config"}


def parse_module(path: Path) -> ast.AST:
    try:
        return ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    except (OSError, SyntaxError) as exc:  # pragma: no cover - explicit failure in test
        pytest.fail(f"Failed to parse {path}: {exc}")


def imported_modules(tree: ast.AST) -> set[str]:
    names: set[str] = set()
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            names.update(alias.name for alias in node.names)
        elif isinstance(node, ast.ImportFrom) and node.module:
            names.add(node.module)
    return names


def _top_matches(name: str, forbidden: set[str]) -> Optional[str]:
    for f in forbidden:
        if name == f or name.startswith(f + "."):
            return f
    return None


def py_files_under(root: Path) -> list[Path]:
    return [p for p in root.rglob("*.py") if "__pycache__" not in p.parts]


@pytest.mark.parametrize("path", PURE_MODULES, ids=lambda p: p.name)
def test_arch_1_engine_modules_import_no_io_stack(path: Path) -> None:
    assert path.exists(), f"{path.relative_to(PROJECT_ROOT)} must exist"
    offenders = sorted(
        name for name in imported_modules(parse_module(path)) if _top_matches(name, FORBIDDEN_IN_PURE)
    )
    assert not offenders, f"{path.name} must stay pure; found imports {offenders}"


def test_arch_2_error_types_derive_from_reorder_error() -> None:
    tree = parse_module(LOGIC_DIR / "errors.py")
    bases = {
        node.name: [b.id for b in node.bases if isinstance(b, ast.Name)]
        for node in ast.walk(tree)
        if isinstance(node, ast.ClassDef)
    }
    assert bases.get("ReorderError") == ["Exception"]
    for name in ("OutOfRangeError", "UnknownCodeError", "InvariantViolationError"):
        assert bases.get(name) == ["ReorderError"], f"{name} must subclass ReorderError"


def test_arch_3_every_error_type_has_http_mapping() -> None:
    source = (PKG_DIR / "http" / "problem.py").read_text(encoding="utf-8")
    for name in ("OutOfRangeError", "UnknownCodeError", "InvariantViolationError"):
        assert f"{name}: {{" in source, f"REORDER_ERROR_MAP must map {name}"


def test_arch_4_environment_is_read_only_by_config() -> None:
    offenders = []
    for path in py_files_under(PKG_DIR):
        if path.name == "config.py":
            continue
        for node in ast.walk(parse_module(path)):
            if isinstance(node, ast.Attribute) and node.attr in {"environ", "getenv"}:
                offenders.append(str(path.relative_to(PROJECT_ROOT)))
    assert not offenders, f"Only sample_order/config.py may read the environment: {offenders}"


def test_arch_5_routes_do_not_issue_sql() -> None:
    for path in py_files_under(PKG_DIR / "routes"):
        if path.name == "health.py":
            continue
        imports = imported_modules(parse_module(path))
        assert not any(_top_matches(n, {"sqlalchemy"}) for n in imports), (
            f"{path.name} must delegate persistence to repository/service modules"
        )


def test_arch_6_no_bare_except_in_package() -> None:
    for path in py_files_under(PKG_DIR):
        for node in ast.walk(parse_module(path)):
            if isinstance(node, ast.ExceptHandler):
                assert node.type is not None, f"bare except in {path.relative_to(PROJECT_ROOT)}:{node.lineno}"


def test_arch_7_migrations_ship_inside_package() -> None:
    files = sorted(p.name for p in (PKG_DIR / "migrations").glob("*.sql"))
    assert files and files[0] == "001_sample.sql"
