import os
import uuid
from collections.abc import Generator
from pathlib import Path
from typing import Any

import psycopg
import pytest

from docextract.config.settings import Settings
from docextract.database.connection import close_pool, get_connection, init_pool

# The documents table belongs to the upload workflow; tests create it when missing.
_SCHEMA = """
CREATE TABLE IF NOT EXISTS documents (
    user_id text NOT NULL,
    document_id text NOT NULL,
    name text,
    url text,
    content_type text,
    type text,
    job_id text,
    extracted_content jsonb NOT NULL DEFAULT '{}'::jsonb,
    updated_at timestamptz,
    PRIMARY KEY (user_id, document_id)
);
CREATE INDEX IF NOT EXISTS documents_job_id_idx ON documents (job_id);
CREATE TABLE IF NOT EXISTS extraction_events (
    id bigserial PRIMARY KEY,
    source text NOT NULL,
    payload jsonb NOT NULL DEFAULT '{}'::jsonb,
    status text NOT NULL DEFAULT 'pending',
    attempts integer NOT NULL DEFAULT 0,
    error_message text,
    locked_at timestamptz,
    created_at timestamptz NOT NULL DEFAULT NOW(),
    updated_at timestamptz NOT NULL DEFAULT NOW()
);
"""


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "docextract_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
        with get_connection() as conn:
            conn.execute(_SCHEMA)
            conn.commit()
    except Exception as e:
        close_pool()
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to run.")
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def clean_events(integration_pool: None) -> Generator[None, None, None]:
    """Start and finish with an empty event queue so claims only see this test's rows."""
    with get_connection() as conn:
        conn.execute("DELETE FROM extraction_events")
        conn.commit()
    yield
    with get_connection() as conn:
        conn.execute("DELETE FROM extraction_events")
        conn.commit()


@pytest.fixture
def integration_cleanup() -> Generator[list[tuple[str, str]], None, None]:
    cleanup: list[tuple[str, str]] = []
    yield cleanup
    if not cleanup:
        return
    with get_connection() as conn:
        with conn.cursor() as cur:
            for owner_id, document_id in cleanup:
                cur.execute(
                    "DELETE FROM documents WHERE user_id = %s AND document_id = %s",
                    (owner_id, document_id),
                )
        conn.commit()


@pytest.fixture
def seed_document_factory(
    db_conn: psycopg.Connection[Any],
    integration_cleanup: list[tuple[str, str]],
) -> Any:
    def _seed(
        name: str = "Catalog 1962",
        filename: str = "catalog.pdf",
        content_type: str = "application/pdf",
        kind: str = "pdf",
    ) -> tuple[str, str]:
        owner_id = f"user-{uuid.uuid4()}"
        document_id = str(uuid.uuid4())
        with db_conn.cursor() as cur:
            cur.execute(
                """
                INSERT INTO documents (user_id, document_id, name, url, content_type, type)
                VALUES (%s, %s, %s, %s, %s, %s)
                """,
                (
                    owner_id,
                    document_id,
                    name,
                    f"https://cdn.example.com/images/{owner_id}/{filename}",
                    content_type,
                    kind,
                ),
            )
        db_conn.commit()
        integration_cleanup.append((owner_id, document_id))
        return owner_id, document_id

    return _seed


@pytest.fixture
def seed_document(seed_document_factory: Any) -> tuple[str, str]:
    return seed_document_factory()


@pytest.fixture
def files_root(tmp_path: Path) -> Path:
    return tmp_path
