"""Display currency endpoints and the preference cookie."""

from __future__ import annotations

from fastapi import APIRouter, Cookie, Header, HTTPException, Query, Response
from pydantic import BaseModel

from futureedge_shared.currency import (
    CURRENCY_NAMES,
    CURRENCY_SYMBOLS,
    EXCHANGE_RATES,
    RATES_UPDATED,
    get_all_currencies,
    get_converted_price,
    get_popular_currencies,
    is_supported_currency,
)

from futureedge_api.dependencies import CURRENCY_COOKIE, resolve_currency
from futureedge_api.responses import wrap_response

router = APIRouter(prefix="/currency", tags=["currency"])

COOKIE_MAX_AGE = 60 * 60 * 24 * 365


class CurrencyPreference(BaseModel):
    currency: str


def _describe(code: str) -> dict:
    return {
        "code": code,
        "name": CURRENCY_NAMES.get(code, code),
        "symbol": CURRENCY_SYMBOLS.get(code, code),
        "rate": EXCHANGE_RATES.get(code),
    }


@router.get("")
async def list_currencies():
    data = {
        "popular": [_describe(c) for c in get_popular_currencies()],
        "all": [_describe(c) for c in get_all_currencies()],
        "rates_updated": RATES_UPDATED,
    }
    return wrap_response(data, total_count=len(data["all"]))


@router.get("/convert")
async def convert(
    amount: float = Query(..., ge=0),
    from_currency: str = Query("USD", alias="from"),
    to_currency: str = Query(..., alias="to"),
):
    converted = get_converted_price(amount, from_currency.upper(), to_currency.upper())
    return wrap_response(converted.model_dump(), currency=converted.currency)


@router.get("/preference")
async def get_preference(
    preferred: str | None = Cookie(None, alias=CURRENCY_COOKIE),
    accept_language: str | None = Header(None),
):
    currency = resolve_currency(None, preferred, accept_language)
    return wrap_response(_describe(currency), currency=currency)


@router.put("/preference")
async def set_preference(body: CurrencyPreference, response: Response):
    currency = body.currency.strip().upper()
    if not is_supported_currency(currency):
        raise HTTPException(status_code=400, detail=f"Unsupported currency '{body.currency}'")
    response.set_cookie(
        CURRENCY_COOKIE, currency, max_age=COOKIE_MAX_AGE, samesite="lax", httponly=False,
    )
    return wrap_response(_describe(currency), currency=currency, message="Preference saved")
