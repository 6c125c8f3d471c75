from fastapi import APIRouter, Depends

from futureedge_api.middleware.auth import require_admin
from futureedge_api.routers.admin import (
    bookings,
    camps,
    customers,
    dashboard,
    data,
    enquiries,
    offers,
    payments,
)

admin_router = APIRouter(prefix="/admin", dependencies=[Depends(require_admin)])

admin_router.include_router(dashboard.router)
admin_router.include_router(data.router)
admin_router.include_router(camps.router)
admin_router.include_router(bookings.router)
admin_router.include_router(customers.router)
admin_router.include_router(enquiries.router)
admin_router.include_router(payments.router)
admin_router.include_router(offers.router)
