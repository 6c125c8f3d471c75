"""
models/camps.py — Pydantic models for camps, booking requests and enquiries.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from futureedge_shared.constants import (
    CampStatus,
    EnquiryStatus,
)


class Camp(BaseModel):
    """Matches the camps table row.

    Only the columns the service layer reasons about are typed; the rest of
    the (wide) row is carried through as extra fields.
    """

    model_config = ConfigDict(extra="allow")

    id: str
    name: str
    slug: str | None = None
    status: CampStatus = "draft"
    category: str | None = None
    organisation_id: str | None = None
    location: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    age_min: int | None = None
    age_max: int | None = None
    capacity: int = 0
    enrolled_count: int = 0
    price: float = 0
    currency: str = "USD"
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_db_row(cls, row: dict[str, Any]) -> "Camp":
        return cls(**row)

    @property
    def available_places(self) -> int:
        return self.capacity - self.enrolled_count

    @property
    def duration_days(self) -> int | None:
        if self.start_date is None or self.end_date is None:
            return None
        return abs((self.end_date - self.start_date).days)


class BookingCreate(BaseModel):
    """Public booking request body."""

    child_id: UUID
    parent_id: UUID
    notes: str | None = Field(default=None, max_length=2000)

    def to_insert_dict(self, camp: Camp) -> dict[str, Any]:
        return {
            "camp_id": camp.id,
            "child_id": str(self.child_id),
            "parent_id": str(self.parent_id),
            "notes": self.notes,
            "status": "pending",
            "payment_status": "unpaid",
            "amount_due": camp.price,
            "amount_paid": 0,
        }


class EnquiryCreate(BaseModel):
    """Pre-booking question submitted by a parent about a camp."""

    parent_name: str = Field(min_length=1, max_length=200)
    parent_email: EmailStr
    parent_phone: str | None = Field(default=None, max_length=50)
    subject: str = Field(min_length=1, max_length=300)
    message: str = Field(min_length=1, max_length=5000)

    def to_insert_dict(self, camp_id: str) -> dict[str, Any]:
        return {
            "camp_id": camp_id,
            "parent_name": self.parent_name,
            "parent_email": self.parent_email,
            "parent_phone": self.parent_phone or None,
            "subject": self.subject,
            "message": self.message,
            "status": "new",
        }


class EnquiryResponse(BaseModel):
    """Admin reply to an enquiry."""

    response: str = Field(min_length=1, max_length=5000)


class EnquiryStatusUpdate(BaseModel):
    status: EnquiryStatus
