"""Download endpoint for signed, time-limited document links."""

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import FileResponse, JSONResponse

from app.domain.exceptions import StorageError
from app.infrastructure.dependencies import get_document_storage
from app.infrastructure.storage.local_document_storage import LocalDocumentStorage
from app.presentation.api.error_handlers import error_response

router = APIRouter(prefix="/files", tags=["Files"])


@router.get("/{document_ref:path}", response_model=None)
async def download_document(
    document_ref: str,
    expires: int = Query(...),
    signature: str = Query(...),
    storage: LocalDocumentStorage = Depends(get_document_storage),
) -> FileResponse | JSONResponse:
    """Stream a PDF; the signature in the query string is the credential."""
    try:
        path = storage.open(document_ref, expires, signature)
    except StorageError:
        return error_response(status.HTTP_403_FORBIDDEN, "文件链接无效或已过期", "forbidden")
    return FileResponse(path, media_type="application/pdf", filename=path.name)
