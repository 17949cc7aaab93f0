"""
Lead persistence (raw SQL).

Tables are owned outside this service:
- user_data(mobile, pincode, timestamp, ...)
- lead_stored(mobile, pincode, feedback, status, timestamp)
"""

from __future__ import annotations

from core.db import Database


async def list_submissions_with_leads(db: Database) -> list[dict]:
    """
    Every submission, newest first, with its lead's feedback/status (or NULLs).
    """
    return await db.fetch_all(
        """
        SELECT u.mobile, u.pincode, u.timestamp, l.feedback, l.status
        FROM user_data u
        LEFT JOIN lead_stored l
          ON u.mobile = l.mobile
         AND u.pincode = l.pincode
        ORDER BY u.timestamp DESC
        """
    )


async def insert_lead(
    db: Database,
    *,
    mobile: str,
    pincode: str,
    feedback: str | None,
    status: str | None,
) -> None:
    await db.execute(
        """
        INSERT INTO lead_stored (mobile, pincode, feedback, status)
        VALUES ($1, $2, $3, $4)
        """,
        mobile,
        pincode,
        feedback,
        status,
    )


async def upsert_lead(
    db: Database,
    *,
    mobile: str,
    pincode: str,
    feedback: str | None,
    status: str | None,
) -> bool:
    """
    Insert the lead if no row exists for (mobile, pincode), else update every
    matching row. Returns True when a row was inserted.

    The advisory lock serializes concurrent upserts of the same key until the
    transaction ends, so two callers cannot both take the insert path.
    """
    async with db.transaction() as conn:
        await conn.execute(
            "SELECT pg_advisory_xact_lock(hashtext($1))",
            f"{mobile}:{pincode}",
        )
        existing = await conn.fetchrow(
            """
            SELECT 1 AS ok
            FROM lead_stored
            WHERE mobile = $1
              AND pincode = $2
            LIMIT 1
            """,
            mobile,
            pincode,
        )
        if existing is None:
            await conn.execute(
                """
                INSERT INTO lead_stored (mobile, pincode, feedback, status, timestamp)
                VALUES ($1, $2, $3, $4, now())
                """,
                mobile,
                pincode,
                feedback,
                status,
            )
            return True

        await conn.execute(
            """
            UPDATE lead_stored
            SET feedback = $3,
                status = $4,
                timestamp = now()
            WHERE mobile = $1
              AND pincode = $2
            """,
            mobile,
            pincode,
            feedback,
            status,
        )
        return False


async def delete_leads(db: Database, *, mobile: str, pincode: str) -> int:
    return await db.execute(
        """
        DELETE FROM lead_stored
        WHERE mobile = $1
          AND pincode = $2
        """,
        mobile,
        pincode,
    )
