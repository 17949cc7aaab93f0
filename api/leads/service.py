"""
Lead business logic.

Scope:
- presence checks for the (mobile, pincode) key
- display defaults and IST date formatting for the listing
- translating storage failures into generic API errors
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from core.db import Database

from . import repository, schemas

logger = logging.getLogger(__name__)

DISPLAY_TZ = ZoneInfo("Asia/Kolkata")
DISPLAY_DATE_FORMAT = "%d-%m-%Y"
INVALID_DATE = "Invalid Date"
ZERO_DATES = {"0000-00-00 00:00:00", "0000-00-00"}

DEFAULT_FEEDBACK = "Click to edit"
DEFAULT_STATUS = "Select Status"

MISSING_KEY_ERROR = "Mobile and Pincode are required"


class LeadServiceError(RuntimeError):
    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def format_date_ist(value: datetime | str | None) -> str:
    """
    Render a stored UTC instant as an IST calendar date (DD-MM-YYYY).

    Naive values are taken to be UTC. Missing, zero-sentinel or unparseable
    values come back as "Invalid Date".
    """
    if value is None:
        return INVALID_DATE

    if isinstance(value, str):
        raw = value.strip()
        if not raw or raw in ZERO_DATES:
            return INVALID_DATE
        try:
            value = datetime.fromisoformat(raw.replace("Z", "+00:00"))
        except ValueError:
            return INVALID_DATE

    if not isinstance(value, datetime):
        return INVALID_DATE

    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(DISPLAY_TZ).strftime(DISPLAY_DATE_FORMAT)


def _optional_str(value: object) -> str | None:
    return None if value is None else str(value)


def _to_lead_row(row: dict) -> schemas.LeadRow:
    feedback = row.get("feedback")
    status = row.get("status")
    return schemas.LeadRow(
        mobile=_optional_str(row.get("mobile")),
        pincode=_optional_str(row.get("pincode")),
        timestamp=format_date_ist(row.get("timestamp")),
        feedback=DEFAULT_FEEDBACK if feedback is None else str(feedback),
        status=DEFAULT_STATUS if status is None else str(status),
    )


def _require_key(mobile: str | None, pincode: str | None) -> tuple[str, str]:
    if not mobile or not pincode:
        raise LeadServiceError(400, MISSING_KEY_ERROR)
    return mobile, pincode


async def list_leads(db: Database) -> list[schemas.LeadRow]:
    try:
        rows = await repository.list_submissions_with_leads(db)
    except Exception as exc:
        logger.exception("lead_list_failed")
        raise LeadServiceError(500, "Failed to retrieve data") from exc
    return [_to_lead_row(row) for row in rows]


async def store_lead(db: Database, payload: schemas.LeadRequest | None) -> schemas.MessageResponse:
    payload = payload or schemas.LeadRequest()
    logger.info("lead_store_request body=%s", payload.model_dump())
    mobile, pincode = _require_key(payload.mobile, payload.pincode)

    try:
        await repository.insert_lead(
            db,
            mobile=mobile,
            pincode=pincode,
            feedback=payload.feedback,
            status=payload.status,
        )
    except Exception as exc:
        logger.exception("lead_store_failed mobile=%s pincode=%s", mobile, pincode)
        raise LeadServiceError(500, "Failed to store lead data") from exc
    return schemas.MessageResponse(message="Lead stored successfully!")


async def upsert_lead(db: Database, payload: schemas.LeadRequest | None) -> schemas.MessageResponse:
    payload = payload or schemas.LeadRequest()
    logger.info("lead_update_request body=%s", payload.model_dump())
    mobile, pincode = _require_key(payload.mobile, payload.pincode)

    try:
        inserted = await repository.upsert_lead(
            db,
            mobile=mobile,
            pincode=pincode,
            feedback=payload.feedback,
            status=payload.status,
        )
    except Exception as exc:
        logger.exception("lead_update_failed mobile=%s pincode=%s", mobile, pincode)
        raise LeadServiceError(500, "Database update failed") from exc

    if inserted:
        return schemas.MessageResponse(message="New record inserted successfully with timestamp!")
    return schemas.MessageResponse(message="Data updated successfully with latest timestamp!")


async def delete_lead(db: Database, payload: schemas.LeadKeyRequest | None) -> schemas.MessageResponse:
    payload = payload or schemas.LeadKeyRequest()
    logger.info("lead_delete_request body=%s", payload.model_dump())
    mobile, pincode = _require_key(payload.mobile, payload.pincode)

    try:
        deleted = await repository.delete_leads(db, mobile=mobile, pincode=pincode)
    except Exception as exc:
        logger.exception("lead_delete_failed mobile=%s pincode=%s", mobile, pincode)
        raise LeadServiceError(500, "Failed to delete data") from exc

    if deleted == 0:
        raise LeadServiceError(404, "Record not found")
    return schemas.MessageResponse(message="Data deleted successfully!")
