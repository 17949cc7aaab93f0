"""
Lead API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from core.db import Database, get_database

from . import schemas, service

router = APIRouter()

_VALIDATION_ERROR = {400: {"model": schemas.ErrorResponse}}
_STORAGE_ERROR = {500: {"model": schemas.ErrorResponse}}


@router.get(
    "/data",
    response_model=list[schemas.LeadRow],
    responses=_STORAGE_ERROR,
)
async def list_data(db: Database = Depends(get_database)) -> list[schemas.LeadRow]:
    """
    Submissions joined with their lead, newest submission first.
    """
    return await service.list_leads(db)


@router.post(
    "/store-lead",
    response_model=schemas.MessageResponse,
    responses={**_VALIDATION_ERROR, **_STORAGE_ERROR},
)
async def store_lead(
    payload: schemas.LeadRequest | None = None,
    db: Database = Depends(get_database),
) -> schemas.MessageResponse:
    return await service.store_lead(db, payload)


@router.put(
    "/update",
    response_model=schemas.MessageResponse,
    responses={**_VALIDATION_ERROR, **_STORAGE_ERROR},
)
async def update_lead(
    payload: schemas.LeadRequest | None = None,
    db: Database = Depends(get_database),
) -> schemas.MessageResponse:
    return await service.upsert_lead(db, payload)


@router.delete(
    "/delete",
    response_model=schemas.MessageResponse,
    responses={**_VALIDATION_ERROR, 404: {"model": schemas.ErrorResponse}, **_STORAGE_ERROR},
)
async def delete_lead(
    payload: schemas.LeadKeyRequest | None = None,
    db: Database = Depends(get_database),
) -> schemas.MessageResponse:
    return await service.delete_lead(db, payload)
