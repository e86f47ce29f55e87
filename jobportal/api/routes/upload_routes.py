"""
Upload Routes

POST /uploads - Upload resume and/or profile photo (multipart, max 2 files)
GET /uploads/formats - Accepted types, extensions and size limits
"""

from typing import AsyncIterator, List

from fastapi import APIRouter, Depends, HTTPException, Request
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import FormData, UploadFile
from starlette.formparsers import MultiPartException, MultiPartParser
import structlog

from jobportal.api.deps import get_app_settings, get_file_store
from jobportal.core.config import Settings
from jobportal.core.exceptions import FileTooLargeError
from jobportal.services.file_storage import FileStore
from jobportal.utils.file_upload import (
    UploadRequest,
    get_supported_formats,
    measure,
    validate_uploads,
)
from jobportal.schemas.schemas import StoredFileResponse, UploadResponse, error_responses

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/uploads", tags=["Uploads"], responses=error_responses(400, 500))

# Parser-level ceiling; the real per-request cap is settings.max_files_per_request
# and is reported with our own error message.
MAX_PARSED_FILES = 16


def _request_byte_limit(settings: Settings) -> int:
    return settings.max_upload_size + settings.multipart_overhead_bytes


def check_content_length(request: Request, settings: Settings) -> None:
    """Reject a declared oversize body before any of it is read."""
    declared = request.headers.get("content-length", "")
    if declared.isdigit() and int(declared) > _request_byte_limit(settings):
        raise FileTooLargeError(int(declared), settings.max_upload_size)


async def _bounded_stream(request: Request, limit: int, max_upload_size: int) -> AsyncIterator[bytes]:
    # Chunked bodies carry no Content-Length, so count as we go
    received = 0
    async for chunk in request.stream():
        received += len(chunk)
        if received > limit:
            raise FileTooLargeError(received, max_upload_size)
        yield chunk


async def read_upload_form(request: Request, settings: Settings) -> FormData:
    """
    Parse the multipart body, stopping once it passes the request byte limit.

    Non-multipart bodies go through the normal form parser and end up
    with no files, which validation reports.
    """
    check_content_length(request, settings)
    content_type = request.headers.get("content-type", "")
    if not content_type.startswith("multipart/form-data"):
        return await request.form(max_files=MAX_PARSED_FILES)
    if "boundary=" not in content_type:
        raise HTTPException(status_code=400, detail="Missing boundary in multipart.")

    stream = _bounded_stream(request, _request_byte_limit(settings), settings.max_upload_size)
    parser = MultiPartParser(request.headers, stream, max_files=MAX_PARSED_FILES)
    try:
        return await parser.parse()
    except MultiPartException as e:
        raise HTTPException(status_code=400, detail=e.message)


def _to_upload_requests(form_items) -> List[UploadRequest]:
    uploads = []
    for field_name, value in form_items:
        if not isinstance(value, UploadFile):
            continue
        uploads.append(UploadRequest(
            field_name=field_name,
            original_filename=value.filename or "",
            mime_type=value.content_type or "",
            size_bytes=value.size if value.size is not None else measure(value.file),
            content=value.file,
        ))
    return uploads


@router.post("", response_model=UploadResponse, status_code=201)
async def upload_files(
    request: Request,
    store: FileStore = Depends(get_file_store),
    settings: Settings = Depends(get_app_settings),
):
    """
    Upload a resume and/or profile photo to GridFS.

    Multipart parts must be named `resume` (PDF, DOC, DOCX) or
    `profilePhoto` (JPG, PNG). The whole request is validated before
    the first byte is stored. Bodies larger than the upload limit
    are cut off while they are still being received.
    """
    form = await read_upload_form(request, settings)
    try:
        uploads = _to_upload_requests(form.multi_items())
        validate_uploads(uploads, settings)

        stored = []
        for upload in uploads:
            result = await run_in_threadpool(store.save, upload)
            stored.append(StoredFileResponse(
                fieldName=result.field_name,
                fileId=result.file_id,
                filename=result.filename,
                url=result.url,
            ))
    finally:
        await form.close()

    logger.info("Files uploaded", files=[s.filename for s in stored])
    return UploadResponse(files=stored)


@router.get("/formats")
async def upload_formats(settings: Settings = Depends(get_app_settings)):
    """Get accepted upload formats and limits."""
    return get_supported_formats(settings)
