"""Dev-only content editing endpoints (mounted in development only)."""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from futureedge_api.responses import error_response
from futureedge_api.services import dev_editor_service
from futureedge_api.services.dev_editor_service import DevEditError

router = APIRouter(prefix="/api", tags=["dev"])

_ERROR_CODES = {400: "validation", 403: "permission_denied", 404: "not_found"}


class EditRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    file_path: str | None = Field(None, alias="filePath")
    old_text: str | None = Field(None, alias="oldText")
    new_text: str | None = Field(None, alias="newText")
    element_type: str | None = Field(None, alias="elementType")
    search_in_multiple_files: bool = Field(False, alias="searchInMultipleFiles")


class FindTextRequest(BaseModel):
    text: str | None = None


def _error(exc: DevEditError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response(
            _ERROR_CODES.get(exc.status_code, "error"), exc.message, details=exc.details,
        ),
    )


@router.post("/dev-edit")
async def dev_edit(body: EditRequest):
    try:
        result = dev_editor_service.edit_text(
            body.file_path,
            body.old_text,
            body.new_text,
            search_in_multiple_files=body.search_in_multiple_files,
        )
    except DevEditError as exc:
        return _error(exc)
    return {"success": True, "file_path": result.file_path, "message": result.message}


@router.post("/dev-find-text")
async def dev_find_text(body: FindTextRequest):
    try:
        results = dev_editor_service.find_text(body.text)
    except DevEditError as exc:
        return _error(exc)
    return {"results": results}
