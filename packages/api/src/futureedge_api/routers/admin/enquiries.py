"""Admin enquiry triage."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from futureedge_shared.constants import EnquiryStatus
from futureedge_shared.models import EnquiryResponse, EnquiryStatusUpdate

from futureedge_api.middleware.auth import AuthUser, require_admin
from futureedge_api.responses import wrap_response
from futureedge_api.services import enquiry_service

router = APIRouter(prefix="/enquiries", tags=["admin-enquiries"])


@router.get("")
async def list_enquiries(status: EnquiryStatus | None = Query(None)):
    enquiries = enquiry_service.list_enquiries(status=status)
    response = wrap_response(enquiries, total_count=len(enquiries))
    response["meta"]["counts"] = enquiry_service.enquiry_counts(enquiries)
    return response


@router.patch("/{enquiry_id}/status")
async def update_status(enquiry_id: str, body: EnquiryStatusUpdate):
    enquiry = enquiry_service.update_status(enquiry_id, body.status)
    if enquiry is None:
        raise HTTPException(status_code=404, detail=f"Enquiry '{enquiry_id}' not found")
    return wrap_response(enquiry)


@router.post("/{enquiry_id}/response")
async def respond(
    enquiry_id: str,
    body: EnquiryResponse,
    user: AuthUser = Depends(require_admin),
):
    enquiry = enquiry_service.respond(enquiry_id, body.response.strip(), user.user_id)
    if enquiry is None:
        raise HTTPException(status_code=404, detail=f"Enquiry '{enquiry_id}' not found")
    return wrap_response(enquiry, message="Response sent")
