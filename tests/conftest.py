from __future__ import annotations

import sqlite3
from collections.abc import Iterator
from pathlib import Path

import pytest

from products import SCHEMA_SQL, SEED_SQL, ProductRowMapper
from sql_template.database import SqliteDataSource, SqlTemplate, initialize_database


@pytest.fixture(autouse=True)
def app_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """
    Forces test mode. Application code can use this to refuse dangerous behaviors.
    Automatically applied to all tests.
    """
    monkeypatch.setenv("APP_ENV", "test")


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """
    A dedicated temp root directory for each test.
    All filesystem writes in tests should be under this root (or tmp_path directly).
    """
    root = tmp_path / "proj"
    (root / "data" / "out").mkdir(parents=True)
    (root / "sql").mkdir()
    return root


@pytest.fixture(autouse=True)
def chdir_to_project_root(project_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """
    Automatically change working directory to project_root for all tests.
    This ensures relative-path operations go into the temp directory by default.
    """
    monkeypatch.chdir(project_root)


@pytest.fixture
def sqlite_path(project_root: Path) -> Path:
    """
    On-disk SQLite DB under the temp project root (more realistic than :memory:).
    """
    return project_root / "data" / "out" / "test.sqlite"


@pytest.fixture
def db_conn(sqlite_path: Path, project_root: Path) -> Iterator[sqlite3.Connection]:
    """
    A raw SQLite connection for inspecting the database behind the template.

    Safety enforcement:
    - Path assertion: DB must be under project_root (prevents touching real DBs)
    """
    try:
        sqlite_path.resolve().relative_to(project_root.resolve())
    except ValueError:
        raise AssertionError(
            f"SQLite path {sqlite_path} is not under project_root {project_root}. "
            "This prevents accidental writes to real databases."
        )

    conn = sqlite3.connect(sqlite_path)
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture
def product_scripts(project_root: Path) -> list[Path]:
    """Schema and seed scripts for the products table, written under project_root/sql."""
    schema = project_root / "sql" / "schema.sql"
    seed = project_root / "sql" / "seed_data.sql"
    schema.write_text(SCHEMA_SQL, encoding="utf-8")
    seed.write_text(SEED_SQL, encoding="utf-8")
    return [schema, seed]


@pytest.fixture
def data_source(sqlite_path: Path, product_scripts: list[Path]) -> SqliteDataSource:
    """File-backed data source seeded with Samsung (1), Xiaomi (2) and Apple (3)."""
    source = SqliteDataSource(sqlite_path)
    initialize_database(source, *product_scripts)
    return source


@pytest.fixture
def template(data_source: SqliteDataSource) -> SqlTemplate:
    return SqlTemplate(data_source)


@pytest.fixture
def product_mapper() -> ProductRowMapper:
    return ProductRowMapper()
