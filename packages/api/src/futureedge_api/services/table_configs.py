"""
Declarative schemas for the tables managed through the generic admin table.

Each TableConfig lists the columns the admin UI renders and the import
validator understands. Column names are the database column names; display
names are what appear in CSV headers and error messages.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Literal

from futureedge_shared.constants import (
    BLOG_POST_STATUSES,
    BOOKING_STATUSES,
    CAMP_CATEGORIES,
    CAMP_STATUSES,
    ENQUIRY_STATUSES,
    PAYMENT_STATUSES,
    ROLES,
)

ColumnType = Literal[
    "text", "number", "date", "datetime", "boolean", "enum", "json", "foreign_key",
]
TableCategory = Literal["core", "users", "operations", "content", "financial", "system"]


@dataclass(frozen=True)
class ForeignKey:
    table: str
    column: str
    display: str


@dataclass(frozen=True)
class ColumnConfig:
    name: str
    display_name: str
    type: ColumnType
    required: bool = False
    editable: bool = True
    enum_values: tuple[str, ...] | None = None
    foreign_key: ForeignKey | None = None
    # Returns an error message, or None when the raw value is acceptable
    validation: Callable[[str], str | None] | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "display_name": self.display_name,
            "type": self.type,
            "required": self.required,
            "editable": self.editable,
        }
        if self.enum_values is not None:
            data["enum_values"] = list(self.enum_values)
        if self.foreign_key is not None:
            data["foreign_key"] = {
                "table": self.foreign_key.table,
                "column": self.foreign_key.column,
                "display": self.foreign_key.display,
            }
        return data


@dataclass(frozen=True)
class TableConfig:
    name: str
    display_name: str
    category: TableCategory
    columns: tuple[ColumnConfig, ...]
    primary_key: str = "id"
    soft_delete: bool = False
    order_by: tuple[str, bool] | None = None  # (column, ascending)
    search_columns: tuple[str, ...] = field(default=())

    def column(self, name: str) -> ColumnConfig | None:
        for col in self.columns:
            if col.name == name:
                return col
        return None

    @property
    def editable_columns(self) -> list[ColumnConfig]:
        return [c for c in self.columns if c.editable]

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "display_name": self.display_name,
            "category": self.category,
            "primary_key": self.primary_key,
            "soft_delete": self.soft_delete,
            "order_by": (
                {"column": self.order_by[0], "ascending": self.order_by[1]}
                if self.order_by else None
            ),
            "search_columns": list(self.search_columns),
            "columns": [c.to_dict() for c in self.columns],
        }


# ---------------------------------------------------------------------------
# Column validators
# ---------------------------------------------------------------------------

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_SLUG_RE = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


def _validate_email(value: str) -> str | None:
    return None if _EMAIL_RE.match(value) else "Must be a valid email address"


def _validate_slug(value: str) -> str | None:
    if _SLUG_RE.match(value):
        return None
    return "Must contain only lowercase letters, numbers and hyphens"


def _validate_rating(value: str) -> str | None:
    try:
        rating = float(value)
    except ValueError:
        return None  # number coercion reports this
    return None if 1 <= rating <= 5 else "Must be between 1 and 5"


def _fk(table: str, display: str = "name") -> ForeignKey:
    return ForeignKey(table=table, column="id", display=display)


def _created_at() -> ColumnConfig:
    return ColumnConfig("created_at", "Created At", "datetime", editable=False)


# ---------------------------------------------------------------------------
# Table registry
# ---------------------------------------------------------------------------

TABLE_CONFIGS: tuple[TableConfig, ...] = (
    TableConfig(
        name="organisations",
        display_name="Organisations",
        category="core",
        order_by=("name", True),
        search_columns=("name", "contact_email"),
        columns=(
            ColumnConfig("name", "Organisation Name", "text", required=True),
            ColumnConfig("slug", "Slug", "text", required=True, validation=_validate_slug),
            ColumnConfig("contact_email", "Contact Email", "text", required=True, validation=_validate_email),
            ColumnConfig("contact_phone", "Contact Phone", "text"),
            ColumnConfig("website", "Website", "text"),
            ColumnConfig("timezone", "Timezone", "text"),
            ColumnConfig("about", "About", "text"),
            ColumnConfig("established_year", "Established Year", "number"),
            ColumnConfig("verified", "Verified", "boolean"),
            ColumnConfig("active", "Active", "boolean"),
            _created_at(),
        ),
    ),
    TableConfig(
        name="profiles",
        display_name="User Profiles",
        category="users",
        order_by=("created_at", False),
        search_columns=("first_name", "last_name", "email"),
        columns=(
            ColumnConfig("first_name", "First Name", "text", required=True),
            ColumnConfig("last_name", "Last Name", "text", required=True),
            ColumnConfig("email", "Email", "text", validation=_validate_email),
            ColumnConfig("role", "Role", "enum", required=True, enum_values=ROLES),
            ColumnConfig("phone", "Phone", "text"),
            ColumnConfig("organisation_id", "Organisation", "foreign_key", foreign_key=_fk("organisations")),
            ColumnConfig("last_seen_at", "Last Seen", "datetime", editable=False),
            _created_at(),
        ),
    ),
    TableConfig(
        name="camps",
        display_name="Camps",
        category="content",
        order_by=("created_at", False),
        search_columns=("name", "location", "description"),
        columns=(
            ColumnConfig("name", "Camp Name", "text", required=True),
            ColumnConfig("slug", "Slug", "text", required=True, validation=_validate_slug),
            ColumnConfig("description", "Description", "text"),
            ColumnConfig("category", "Category", "enum", enum_values=CAMP_CATEGORIES),
            ColumnConfig("status", "Status", "enum", enum_values=CAMP_STATUSES),
            ColumnConfig(
                "organisation_id", "Organisation", "foreign_key", required=True,
                foreign_key=_fk("organisations"),
            ),
            ColumnConfig("location", "Location", "text"),
            ColumnConfig("start_date", "Start Date", "date", required=True),
            ColumnConfig("end_date", "End Date", "date", required=True),
            ColumnConfig("age_min", "Minimum Age", "number"),
            ColumnConfig("age_max", "Maximum Age", "number"),
            ColumnConfig("capacity", "Capacity", "number", required=True),
            ColumnConfig("price", "Price", "number", required=True),
            ColumnConfig("currency", "Currency", "text"),
            ColumnConfig("highlights", "Highlights", "json"),
            ColumnConfig("amenities", "Amenities", "json"),
            ColumnConfig("featured", "Featured", "boolean"),
            _created_at(),
        ),
    ),
    TableConfig(
        name="bookings",
        display_name="Bookings",
        category="operations",
        order_by=("registration_date", False),
        columns=(
            ColumnConfig(
                "camp_id", "Camp", "foreign_key", required=True, editable=False,
                foreign_key=_fk("camps"),
            ),
            ColumnConfig("status", "Status", "enum", enum_values=BOOKING_STATUSES),
            ColumnConfig("payment_status", "Payment Status", "enum", enum_values=PAYMENT_STATUSES),
            ColumnConfig("amount_paid", "Amount Paid", "number"),
            ColumnConfig("amount_due", "Amount Due", "number"),
            ColumnConfig("registration_date", "Registration Date", "datetime", editable=False),
            ColumnConfig("forms_submitted", "Forms Submitted", "boolean"),
            ColumnConfig("photo_permission", "Photo Permission", "boolean"),
            ColumnConfig("notes", "Notes", "text"),
        ),
    ),
    TableConfig(
        name="children",
        display_name="Children",
        category="users",
        order_by=("created_at", False),
        search_columns=("first_name", "last_name"),
        columns=(
            ColumnConfig("first_name", "First Name", "text", required=True),
            ColumnConfig("last_name", "Last Name", "text", required=True),
            ColumnConfig("date_of_birth", "Date of Birth", "date", required=True),
            ColumnConfig("gender", "Gender", "text"),
            ColumnConfig("grade", "Grade", "text"),
            ColumnConfig("parent_id", "Parent", "foreign_key", foreign_key=_fk("parents", "id")),
            ColumnConfig("allergies", "Allergies", "text"),
            ColumnConfig("medical_conditions", "Medical Conditions", "text"),
            _created_at(),
        ),
    ),
    TableConfig(
        name="parents",
        display_name="Parents",
        category="users",
        order_by=("created_at", False),
        columns=(
            ColumnConfig(
                "profile_id", "Profile", "foreign_key", required=True,
                foreign_key=_fk("profiles", "first_name"),
            ),
            ColumnConfig("emergency_contact_name", "Emergency Contact Name", "text"),
            ColumnConfig("emergency_contact_phone", "Emergency Contact Phone", "text"),
            ColumnConfig("emergency_contact_relationship", "Emergency Contact Relationship", "text"),
            ColumnConfig("address", "Address", "json"),
            ColumnConfig("notes", "Notes", "text"),
            _created_at(),
        ),
    ),
    TableConfig(
        name="enquiries",
        display_name="Enquiries",
        category="operations",
        order_by=("created_at", False),
        search_columns=("parent_name", "parent_email", "subject"),
        columns=(
            ColumnConfig("camp_id", "Camp", "foreign_key", required=True, foreign_key=_fk("camps")),
            ColumnConfig("parent_name", "Parent Name", "text", required=True),
            ColumnConfig("parent_email", "Parent Email", "text", required=True, validation=_validate_email),
            ColumnConfig("parent_phone", "Parent Phone", "text"),
            ColumnConfig("subject", "Subject", "text", required=True),
            ColumnConfig("message", "Message", "text", required=True),
            ColumnConfig("status", "Status", "enum", enum_values=ENQUIRY_STATUSES),
            ColumnConfig("response", "Response", "text"),
            ColumnConfig("responded_at", "Responded At", "datetime", editable=False),
            _created_at(),
        ),
    ),
    TableConfig(
        name="feedback",
        display_name="Feedback",
        category="operations",
        order_by=("submitted_at", False),
        columns=(
            ColumnConfig(
                "overall_rating", "Overall Rating", "number", required=True, editable=False,
                validation=_validate_rating,
            ),
            ColumnConfig("staff_rating", "Staff Rating", "number", editable=False),
            ColumnConfig("activities_rating", "Activities Rating", "number", editable=False),
            ColumnConfig("facilities_rating", "Facilities Rating", "number", editable=False),
            ColumnConfig("value_rating", "Value Rating", "number", editable=False),
            ColumnConfig("comments", "Comments", "text", editable=False),
            ColumnConfig("would_recommend", "Would Recommend", "boolean", editable=False),
            ColumnConfig("testimonial_permission", "Testimonial Permission", "boolean"),
            ColumnConfig("submitted_at", "Submitted At", "datetime", editable=False),
        ),
    ),
    TableConfig(
        name="communications",
        display_name="Communications",
        category="content",
        order_by=("created_at", False),
        columns=(
            ColumnConfig(
                "type", "Type", "enum", required=True,
                enum_values=("email", "sms", "notification", "announcement"),
            ),
            ColumnConfig("subject", "Subject", "text"),
            ColumnConfig("body", "Body", "text", required=True),
            ColumnConfig(
                "status", "Status", "enum",
                enum_values=("draft", "scheduled", "sent", "failed"),
            ),
            ColumnConfig(
                "recipient_type", "Recipient Type", "enum", required=True,
                enum_values=("all_parents", "camp_specific", "individual"),
            ),
            ColumnConfig("sent_at", "Sent At", "datetime", editable=False),
            ColumnConfig("scheduled_for", "Scheduled For", "datetime"),
            _created_at(),
        ),
    ),
    TableConfig(
        name="discount_codes",
        display_name="Discount Codes",
        category="financial",
        order_by=("created_at", False),
        search_columns=("code", "description"),
        columns=(
            ColumnConfig("code", "Code", "text", required=True),
            ColumnConfig("description", "Description", "text"),
            ColumnConfig(
                "discount_type", "Discount Type", "enum", required=True,
                enum_values=("percentage", "fixed_amount"),
            ),
            ColumnConfig("discount_value", "Discount Value", "number", required=True),
            ColumnConfig("valid_from", "Valid From", "date", required=True),
            ColumnConfig("valid_until", "Valid Until", "date", required=True),
            ColumnConfig("active", "Active", "boolean"),
            ColumnConfig("uses_count", "Uses Count", "number", editable=False),
            ColumnConfig("max_uses", "Max Uses", "number"),
        ),
    ),
    TableConfig(
        name="incidents",
        display_name="Incidents",
        category="operations",
        order_by=("incident_date", False),
        columns=(
            ColumnConfig(
                "incident_type", "Incident Type", "enum", required=True,
                enum_values=("injury", "behavioral", "medical", "other"),
            ),
            ColumnConfig(
                "severity", "Severity", "enum", required=True,
                enum_values=("low", "medium", "high", "critical"),
            ),
            ColumnConfig("description", "Description", "text", required=True),
            ColumnConfig("action_taken", "Action Taken", "text", required=True),
            ColumnConfig("incident_date", "Incident Date", "datetime", required=True),
            ColumnConfig("parent_notified", "Parent Notified", "boolean"),
            ColumnConfig("follow_up_required", "Follow-up Required", "boolean"),
            ColumnConfig("follow_up_completed", "Follow-up Completed", "boolean"),
        ),
    ),
    TableConfig(
        name="blog_posts",
        display_name="Blog Posts",
        category="content",
        order_by=("published_at", False),
        search_columns=("title", "excerpt"),
        columns=(
            ColumnConfig("title", "Title", "text", required=True),
            ColumnConfig("slug", "Slug", "text", required=True, validation=_validate_slug),
            ColumnConfig("excerpt", "Excerpt", "text"),
            ColumnConfig("content", "Content", "text", required=True),
            ColumnConfig("featured_image", "Featured Image", "text"),
            ColumnConfig("author_id", "Author", "foreign_key", foreign_key=_fk("blog_authors")),
            ColumnConfig("category_id", "Category", "foreign_key", foreign_key=_fk("blog_categories")),
            ColumnConfig("status", "Status", "enum", enum_values=BLOG_POST_STATUSES),
            ColumnConfig("seo_title", "SEO Title", "text"),
            ColumnConfig("seo_description", "SEO Description", "text"),
            ColumnConfig("published_at", "Published At", "datetime"),
            ColumnConfig("view_count", "Views", "number", editable=False),
            _created_at(),
        ),
    ),
    TableConfig(
        name="programmatic_pages",
        display_name="SEO Landing Pages",
        category="content",
        order_by=("camp_count", False),
        search_columns=("title", "slug", "location"),
        columns=(
            ColumnConfig(
                "page_type", "Page Type", "enum", required=True,
                enum_values=(
                    "location", "category", "age",
                    "location_category", "location_age", "category_age",
                ),
            ),
            ColumnConfig("slug", "Slug", "text", required=True, validation=_validate_slug),
            ColumnConfig("location", "Location", "text"),
            ColumnConfig("category", "Category", "text"),
            ColumnConfig("age_min", "Minimum Age", "number"),
            ColumnConfig("age_max", "Maximum Age", "number"),
            ColumnConfig("title", "Title", "text", required=True),
            ColumnConfig("meta_description", "Meta Description", "text"),
            ColumnConfig("h1_title", "H1 Title", "text"),
            ColumnConfig("intro_content", "Intro Content", "text"),
            ColumnConfig("camp_count", "Camp Count", "number", editable=False),
            ColumnConfig("last_updated", "Last Updated", "datetime", editable=False),
        ),
    ),
    TableConfig(
        name="promotional_offers",
        display_name="Promotional Offers",
        category="financial",
        order_by=("created_at", False),
        search_columns=("name", "description"),
        columns=(
            ColumnConfig("name", "Name", "text", required=True),
            ColumnConfig("description", "Description", "text"),
            ColumnConfig(
                "offer_type", "Offer Type", "enum", required=True,
                enum_values=("percentage_discount", "free_bookings", "trial_period"),
            ),
            ColumnConfig("discount_rate", "Discount Rate", "number"),
            ColumnConfig("free_booking_limit", "Free Booking Limit", "number"),
            ColumnConfig("trial_period_months", "Trial Period (Months)", "number"),
            ColumnConfig("trial_discount_rate", "Trial Discount Rate", "number"),
            ColumnConfig("start_date", "Start Date", "datetime", required=True),
            ColumnConfig("end_date", "End Date", "datetime"),
            ColumnConfig("active", "Active", "boolean"),
            ColumnConfig("auto_apply_to_signups", "Auto Apply to Signups", "boolean"),
            ColumnConfig("display_text", "Display Text", "text"),
            _created_at(),
        ),
    ),
)

_BY_NAME: dict[str, TableConfig] = {t.name: t for t in TABLE_CONFIGS}


def get_table_configs() -> list[TableConfig]:
    return list(TABLE_CONFIGS)


def get_table_config(table_name: str) -> TableConfig | None:
    return _BY_NAME.get(table_name)
