"""
models/offers.py — Pydantic models for promotional commission offers.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from futureedge_shared.constants import OfferType


class PromotionalOffer(BaseModel):
    """Matches the promotional_offers table row."""

    model_config = ConfigDict(extra="allow")

    id: str
    name: str
    description: str | None = None
    offer_type: OfferType
    discount_rate: float | None = None
    free_booking_limit: int | None = None
    trial_period_months: int | None = None
    trial_discount_rate: float | None = None
    start_date: datetime
    end_date: datetime | None = None
    active: bool = True
    auto_apply_to_signups: bool = True
    display_text: str | None = None
    created_by: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_db_row(cls, row: dict[str, Any]) -> "PromotionalOffer":
        return cls(**row)


class PromotionalOfferCreate(BaseModel):
    name: str = Field(min_length=1)
    description: str | None = None
    offer_type: OfferType
    discount_rate: float | None = Field(default=None, ge=0, le=1)
    free_booking_limit: int | None = Field(default=None, ge=0)
    trial_period_months: int | None = Field(default=None, ge=0)
    trial_discount_rate: float | None = Field(default=None, ge=0, le=1)
    start_date: datetime
    end_date: datetime | None = None
    active: bool = True
    auto_apply_to_signups: bool = True
    display_text: str | None = None

    def to_insert_dict(self, created_by: str | None = None) -> dict[str, Any]:
        data = self.model_dump(mode="json")
        data["created_by"] = created_by
        return data


class PromotionalOfferUpdate(BaseModel):
    name: str | None = None
    description: str | None = None
    offer_type: OfferType | None = None
    discount_rate: float | None = Field(default=None, ge=0, le=1)
    free_booking_limit: int | None = Field(default=None, ge=0)
    trial_period_months: int | None = Field(default=None, ge=0)
    trial_discount_rate: float | None = Field(default=None, ge=0, le=1)
    start_date: datetime | None = None
    end_date: datetime | None = None
    active: bool | None = None
    auto_apply_to_signups: bool | None = None
    display_text: str | None = None

    def to_update_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_unset=True)


class OfferStats(BaseModel):
    organizations_enrolled: int = 0
    bookings_under_offer: int = 0
    total_commission_savings: float = 0
    revenue_impact: float = 0
