"""
Pydantic schemas for lead endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class LeadRequest(BaseModel):
    # Presence of mobile/pincode is checked in the service so that a missing
    # key yields the 400 error envelope rather than a 422.
    model_config = ConfigDict(coerce_numbers_to_str=True)

    mobile: str | None = None
    pincode: str | None = None
    feedback: str | None = None
    status: str | None = None


class LeadKeyRequest(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    mobile: str | None = None
    pincode: str | None = None


class LeadRow(BaseModel):
    mobile: str | None
    pincode: str | None
    timestamp: str
    feedback: str
    status: str


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str
