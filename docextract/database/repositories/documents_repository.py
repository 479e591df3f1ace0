from typing import Any

from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from docextract.database.connection import get_connection
from docextract.exceptions import DocumentNotFoundError
from docextract.pipeline.models import Document, ExtractedContent

_DOCUMENT_COLUMNS = """
    user_id, document_id, name, url, content_type, type, job_id, extracted_content
"""


def _row_to_document(row: dict[str, Any]) -> Document:
    return Document(
        owner_id=row["user_id"],
        document_id=row["document_id"],
        name=row["name"] or "",
        source_ref=row["url"] or "",
        content_type=row["content_type"] or "",
        kind=row["type"] or "",
        correlation_key=row["job_id"],
        extracted_content=ExtractedContent.from_dict(row["extracted_content"]),
    )


class DocumentsRepository:
    """Database operations for the documents table."""

    def find_by_key(self, owner_id: str, document_id: str) -> Document:
        """Find a document by its composite key.

        Raises:
            DocumentNotFoundError: if no document with this key exists.
        """
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    SELECT {_DOCUMENT_COLUMNS}
                    FROM documents
                    WHERE user_id = %s AND document_id = %s
                    """,
                    (owner_id, document_id),
                )
                row = cur.fetchone()

        if row is None:
            raise DocumentNotFoundError(f"Document not found: {owner_id}/{document_id}")
        return _row_to_document(row)

    def find_by_job_id(self, job_id: str) -> Document | None:
        """Reverse lookup through documents_job_id_idx. None if no document owns the job."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    SELECT {_DOCUMENT_COLUMNS}
                    FROM documents
                    WHERE job_id = %s
                    LIMIT 1
                    """,
                    (job_id,),
                )
                row = cur.fetchone()

        if row is None:
            return None
        return _row_to_document(row)

    def update_extracted_content(
        self,
        owner_id: str,
        document_id: str,
        patch: dict[str, Any],
        job_id: str | None = None,
    ) -> None:
        """Merge a patch into extracted_content and optionally set the top-level job_id.

        Other columns are left untouched. JSON null values in the patch are stored
        as null, which reads back as an unset field.

        Raises:
            DocumentNotFoundError: if no document with this key exists.
        """
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE documents
                    SET extracted_content = COALESCE(extracted_content, '{}'::jsonb) || %s,
                        job_id = COALESCE(%s, job_id),
                        updated_at = NOW()
                    WHERE user_id = %s AND document_id = %s
                    """,
                    (Jsonb(patch), job_id, owner_id, document_id),
                )
                if cur.rowcount == 0:
                    raise DocumentNotFoundError(
                        f"Document not found: {owner_id}/{document_id}"
                    )
            conn.commit()
