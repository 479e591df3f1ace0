from datetime import datetime, timezone
from typing import Any

import psycopg
from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from docextract.database.connection import get_connection
from docextract.database.models import EventRecord
from docextract.ocr.models import JobCompletion
from docextract.pipeline.triggers import TriggerSource


class EventQueueRepository:
    """Database operations for the extraction_events table."""

    def __init__(self, max_attempts: int) -> None:
        self._max_attempts = max_attempts

    def claim_batch(self, conn: psycopg.Connection[Any], limit: int) -> list[EventRecord]:
        """Claim up to `limit` pending events using SELECT FOR UPDATE SKIP LOCKED."""
        with conn.cursor(row_factory=dict_row) as cur:
            cur.execute(
                """
                SELECT id, source, payload, status, attempts
                FROM extraction_events
                WHERE status = 'pending'
                  AND attempts < %s
                ORDER BY created_at
                LIMIT %s
                FOR UPDATE SKIP LOCKED
                """,
                (self._max_attempts, limit),
            )
            rows = cur.fetchall()

        if not rows:
            conn.commit()
            return []

        conn.execute(
            """
            UPDATE extraction_events
            SET status = 'processing', locked_at = NOW(), updated_at = NOW()
            WHERE id = ANY(%s)
            """,
            ([row["id"] for row in rows],),
        )
        conn.commit()

        return [
            EventRecord(
                id=row["id"],
                source=row["source"],
                payload=row["payload"] or {},
                status="processing",
                attempts=row["attempts"],
            )
            for row in rows
        ]

    def enqueue(self, source: TriggerSource, payload: dict[str, Any]) -> int:
        """Insert a pending event and return its id."""
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    INSERT INTO extraction_events (source, payload, status, attempts)
                    VALUES (%s, %s, 'pending', 0)
                    RETURNING id
                    """,
                    (source.value, Jsonb(payload)),
                )
                row = cur.fetchone()
            conn.commit()
        assert row is not None
        return int(row[0])

    def enqueue_new_document(
        self,
        owner_id: str,
        document_id: str,
        origin: str = "manual",
    ) -> int:
        return self.enqueue(
            TriggerSource.QUEUE,
            {
                "owner_id": owner_id,
                "document_id": document_id,
                "triggered_at": datetime.now(timezone.utc).isoformat(),
                "origin": origin,
            },
        )

    def enqueue_completion(self, completion: JobCompletion) -> int:
        return self.enqueue(
            TriggerSource.NOTIFICATION,
            {
                "job_id": completion.job_id,
                "status": completion.status,
                "location": completion.location,
            },
        )

    def mark_done(self, event_ids: list[int]) -> None:
        with get_connection() as conn:
            conn.execute(
                """
                UPDATE extraction_events
                SET status = 'done', updated_at = NOW()
                WHERE id = ANY(%s)
                """,
                (event_ids,),
            )
            conn.commit()

    def mark_failed(self, event_ids: list[int], error: str) -> None:
        """Dead-letter events: no further delivery."""
        with get_connection() as conn:
            conn.execute(
                """
                UPDATE extraction_events
                SET status = 'failed', attempts = attempts + 1,
                    error_message = %s, updated_at = NOW()
                WHERE id = ANY(%s)
                """,
                (error, event_ids),
            )
            conn.commit()

    def increment_attempts(self, event_ids: list[int], error: str) -> None:
        """Increment attempt count and return events to pending for redelivery."""
        with get_connection() as conn:
            conn.execute(
                """
                UPDATE extraction_events
                SET attempts = attempts + 1, status = 'pending',
                    error_message = %s, locked_at = NULL, updated_at = NOW()
                WHERE id = ANY(%s)
                """,
                (error, event_ids),
            )
            conn.commit()

    def find_by_id(self, event_id: int) -> EventRecord | None:
        """Find an event by ID. Useful for tests."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT id, source, payload, status, attempts,
                           error_message, locked_at, created_at, updated_at
                    FROM extraction_events
                    WHERE id = %s
                    """,
                    (event_id,),
                )
                row = cur.fetchone()

        if row is None:
            return None

        return EventRecord(
            id=row["id"],
            source=row["source"],
            payload=row["payload"] or {},
            status=row["status"],
            attempts=row["attempts"],
            error_message=row["error_message"],
            locked_at=row["locked_at"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
