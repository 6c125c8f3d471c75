"""
futureedge_shared — shared settings, database access, constants and models
for the FutureEdge camp marketplace.

Usage:
    from futureedge_shared.config import settings
    from futureedge_shared.db import get_supabase_client
    from futureedge_shared.currency import convert_price, format_price
    from futureedge_shared.models import Camp, BookingCreate, BlogPost
    from futureedge_shared.constants import CAMP_STATUSES, BOOKING_STATUSES
"""

__version__ = "0.1.0"
