from fastapi import APIRouter

from futureedge_api.routers.v1 import (
    blog,
    camps,
    currency,
    explore,
    offers,
)

v1_router = APIRouter(prefix="/v1")

v1_router.include_router(camps.router)
v1_router.include_router(blog.router)
v1_router.include_router(explore.router)
v1_router.include_router(currency.router)
v1_router.include_router(offers.router)
