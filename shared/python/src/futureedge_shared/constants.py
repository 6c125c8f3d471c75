"""
constants.py — shared constants used across the pipeline and API.

Status enums, role names, discovery filter ranges and SEO page types are
defined here so they stay in sync between Python packages and match the
values stored in the database.
"""

from __future__ import annotations

from typing import Final, Literal

# ---------------------------------------------------------------------------
# Status enums — must match the database check constraints
# ---------------------------------------------------------------------------
CAMP_STATUSES: Final[tuple[str, ...]] = (
    "draft",
    "pending_review",
    "requires_changes",
    "approved",
    "published",
    "unpublished",
    "full",
    "rejected",
    "cancelled",
    "completed",
    "archived",
)

# Camp statuses that accept new bookings from the public site
BOOKABLE_CAMP_STATUSES: Final[frozenset[str]] = frozenset({"published"})

BOOKING_STATUSES: Final[tuple[str, ...]] = (
    "pending",
    "confirmed",
    "waitlisted",
    "cancelled",
    "completed",
)

PAYMENT_STATUSES: Final[tuple[str, ...]] = ("unpaid", "partial", "paid", "refunded")

ENQUIRY_STATUSES: Final[tuple[str, ...]] = ("new", "in_progress", "resolved")

BLOG_POST_STATUSES: Final[tuple[str, ...]] = ("draft", "published", "archived")

CAMP_CATEGORIES: Final[tuple[str, ...]] = (
    "sports",
    "arts",
    "stem",
    "language",
    "adventure",
    "general",
    "academic",
    "creative",
)

# ---------------------------------------------------------------------------
# Roles
# ---------------------------------------------------------------------------
ROLES: Final[tuple[str, ...]] = (
    "parent",
    "camp_organizer",
    "marketing",
    "operations",
    "risk",
    "admin",
    "super_admin",
)

ADMIN_ROLES: Final[frozenset[str]] = frozenset(
    {"super_admin", "admin", "operations", "marketing", "risk"}
)

# ---------------------------------------------------------------------------
# Camp discovery filters
# ---------------------------------------------------------------------------
# key -> (label, min inclusive, max exclusive or None)
PRICE_RANGES: Final[dict[str, tuple[str, float, float | None]]] = {
    "under-500": ("Under $500", 0, 500),
    "500-1000": ("$500 - $1,000", 500, 1000),
    "1000-2500": ("$1,000 - $2,500", 1000, 2500),
    "2500-5000": ("$2,500 - $5,000", 2500, 5000),
    "5000-plus": ("$5,000+", 5000, None),
}

# key -> (label, min days inclusive, max days inclusive or None)
DURATION_FILTERS: Final[dict[str, tuple[str, int, int | None]]] = {
    "weekend": ("Weekend (2-3 days)", 2, 3),
    "1-week": ("1 Week (5-7 days)", 5, 7),
    "2-weeks": ("2 Weeks (10-14 days)", 10, 14),
    "3-weeks": ("3 Weeks (18-21 days)", 18, 21),
    "4-plus-weeks": ("4+ Weeks", 28, 41),
    "full-summer": ("Full Summer (6+ weeks)", 42, None),
}

# Availability bucket threshold (available places at or below this are "limited")
LIMITED_AVAILABILITY_THRESHOLD: Final[int] = 5

# ---------------------------------------------------------------------------
# Typed literals
# ---------------------------------------------------------------------------
CampStatus = Literal[
    "draft", "pending_review", "requires_changes", "approved", "published",
    "unpublished", "full", "rejected", "cancelled", "completed", "archived",
]
BookingStatus = Literal["pending", "confirmed", "waitlisted", "cancelled", "completed"]
PaymentStatus = Literal["unpaid", "partial", "paid", "refunded"]
EnquiryStatus = Literal["new", "in_progress", "resolved"]
ContentQuality = Literal["excellent", "good", "basic", "incomplete"]
Availability = Literal["available", "limited", "full"]
PageType = Literal[
    "location", "category", "age", "location_category", "location_age", "category_age",
]
OfferType = Literal["percentage_discount", "free_bookings", "trial_period"]
Role = Literal[
    "parent", "camp_organizer", "marketing", "operations", "risk", "admin", "super_admin",
]
