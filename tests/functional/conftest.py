"""Functional test bootstrap.

Engine tests need no fixtures. Service tests receive a private in-memory
SQLite engine with migrations applied. API tests share one file-backed
SQLite database configured through the environment before the FastAPI app
is created, and start every test from an empty ``sample`` table.
"""

from __future__ import annotations

import os
from typing import Iterator

import pytest
from sqlalchemy import create_engine, text as sql_text
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from sample_order.db.base import reset_engine
from sample_order.db.migrations_runner import apply_migrations
from sample_order.logic.repository_samples import insert_samples
from sample_order.models.sample import Sample


@pytest.fixture()
def db_engine() -> Iterator[Engine]:
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        future=True,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    apply_migrations(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def seed(db_engine: Engine):
    def _seed(collection_id: str, samples: list[Sample]) -> None:
        with db_engine.begin() as conn:
            insert_samples(conn, collection_id, samples)

    return _seed


@pytest.fixture(scope="session")
def api_app(tmp_path_factory: pytest.TempPathFactory):
    db_file = tmp_path_factory.mktemp("db") / "functional_tests.db"
    os.environ["DATABASE_URL"] = f"sqlite+pysqlite:///{db_file}"
    os.environ.pop("TEST_DATABASE_URL", None)
    os.environ["AUTO_APPLY_MIGRATIONS"] = "1"
    reset_engine()

    from sample_order.main import create_app

    yield create_app()
    reset_engine()


@pytest.fixture()
def client(api_app):
    from fastapi.testclient import TestClient
    from sample_order.db.base import get_engine

    with get_engine().begin() as conn:
        conn.execute(sql_text("DELETE FROM sample"))
    with TestClient(api_app) as c:
        yield c


@pytest.fixture()
def api_seed(client):
    from sample_order.db.base import get_engine

    def _seed(collection_id: str, samples: list[Sample]) -> None:
        with get_engine().begin() as conn:
            insert_samples(conn, collection_id, samples)

    return _seed
