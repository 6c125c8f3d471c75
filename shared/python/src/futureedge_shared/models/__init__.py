"""
futureedge_shared.models — Pydantic models matching the marketplace tables.

The API uses them to validate request bodies and shape query results.

Row models provide `.from_db_row(row: dict) -> Model`; request models
provide `.to_insert_dict(...)`.
"""

from futureedge_shared.models.camps import (
    BookingCreate,
    Camp,
    EnquiryCreate,
    EnquiryResponse,
    EnquiryStatusUpdate,
)
from futureedge_shared.models.content import (
    BlogAuthor,
    BlogCategory,
    BlogPost,
    BlogTag,
    ProgrammaticPage,
)
from futureedge_shared.models.offers import (
    OfferStats,
    PromotionalOffer,
    PromotionalOfferCreate,
    PromotionalOfferUpdate,
)

__all__ = [
    "Camp",
    "BookingCreate",
    "EnquiryCreate",
    "EnquiryResponse",
    "EnquiryStatusUpdate",
    "BlogAuthor",
    "BlogCategory",
    "BlogTag",
    "BlogPost",
    "ProgrammaticPage",
    "PromotionalOffer",
    "PromotionalOfferCreate",
    "PromotionalOfferUpdate",
    "OfferStats",
]
