"""
File Routes

GET /files/{file_id} - Stream a stored file inline (resume PDF, photo ...)
"""

from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from jobportal.api.deps import get_file_store
from jobportal.services.file_storage import FileStore, StoredObject
from jobportal.schemas.schemas import error_responses

router = APIRouter(prefix="/files", tags=["Files"], responses=error_responses(404, 500))


def stream_stored_object(obj: StoredObject, filename: Optional[str] = None) -> StreamingResponse:
    """
    Build an inline streaming response for an open stored file.

    Content-Type comes from the stored metadata. `inline` lets browsers
    render PDFs and images instead of forcing a download.
    """
    disposition = "inline"
    if filename:
        disposition = f'inline; filename="{filename}"'
    headers = {
        "Content-Disposition": disposition,
        "Content-Length": str(obj.length),
    }
    return StreamingResponse(obj.iter_chunks(), media_type=obj.content_type, headers=headers)


@router.get("/{file_id}")
def get_file(file_id: str, store: FileStore = Depends(get_file_store)):
    """Stream a file from GridFS by id. 404 if it does not exist."""
    return stream_stored_object(store.open(file_id))
