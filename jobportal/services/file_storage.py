"""
File Storage Service - GridFS-backed resume / profile photo store.

Write path:
    validated UploadRequest -> open_upload_stream -> chunked copy -> StoredFile

Read path:
    file_id -> open_download_stream -> metadata (content type, length)
            -> iter_chunks() consumed by a StreamingResponse

GridFS files document written for every upload:
{
    "_id": ObjectId,
    "filename": "resume-1718000000000.pdf",
    "length": 2097152,
    "metadata": {
        "originalName": "cv.pdf",
        "fieldName": "resume",
        "uploadedAt": datetime,
        "contentType": "application/pdf"
    }
}
"""

import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterator, Optional

import structlog
from bson import ObjectId
from bson.errors import InvalidId
from gridfs import GridFSBucket
from gridfs.errors import NoFile
from gridfs.grid_file import GridOut
from pymongo.errors import PyMongoError

from jobportal.core.exceptions import NotFoundError, StorageReadError, StorageWriteError
from jobportal.utils.file_upload import UploadRequest

logger = structlog.get_logger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"
COPY_CHUNK_SIZE = 255 * 1024  # GridFS default chunk size


@dataclass
class StoredFile:
    file_id: str
    filename: str
    content_type: str
    url: str
    field_name: str


def build_filename(field_name: str, extension: str, now_ms: Optional[int] = None) -> str:
    """resume + .pdf -> resume-1718000000000.pdf"""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"{field_name}-{now_ms}{extension}"


def parse_file_id(file_id: str) -> ObjectId:
    """Convert a path id to ObjectId; malformed ids are simply not found."""
    try:
        return ObjectId(file_id)
    except (InvalidId, TypeError):
        raise NotFoundError("File not found")


class StoredObject:
    """An open GridFS file ready to be streamed to a client."""

    def __init__(self, grid_out: GridOut, chunk_size: int) -> None:
        self._grid_out = grid_out
        self.chunk_size = chunk_size

    @property
    def file_id(self) -> str:
        return str(self._grid_out._id)

    @property
    def filename(self) -> str:
        return self._grid_out.filename or ""

    @property
    def length(self) -> int:
        return self._grid_out.length

    @property
    def metadata(self) -> dict:
        return self._grid_out.metadata or {}

    @property
    def content_type(self) -> str:
        return self.metadata.get("contentType") or DEFAULT_CONTENT_TYPE

    def iter_chunks(self) -> Iterator[bytes]:
        """
        Yield the file in order, one chunk at a time.

        The consumer pulls chunks as it sends them, so at most one chunk is
        in memory. A read failure after the first chunk cannot become an
        error response anymore; it is logged and re-raised so the server
        aborts the (already started) transfer.
        """
        sent = 0
        try:
            while True:
                data = self._grid_out.read(self.chunk_size)
                if not data:
                    break
                sent += len(data)
                yield data
        except (PyMongoError, OSError) as e:
            logger.error(
                "Error streaming file",
                file_id=self.file_id,
                bytes_sent=sent,
                error=str(e),
            )
            raise
        finally:
            self._grid_out.close()


class FileStore:
    """
    Handles resume / profile photo storage in a GridFS bucket.
    One instance per process, created at startup.
    """

    def __init__(self, bucket: GridFSBucket, url_prefix: str = "", chunk_size: int = COPY_CHUNK_SIZE):
        self.bucket = bucket
        self.url_prefix = url_prefix.rstrip("/")
        self.chunk_size = chunk_size

    def url_for(self, file_id: str) -> str:
        return f"{self.url_prefix}/files/{file_id}"

    def save(self, upload: UploadRequest) -> StoredFile:
        """
        Write an already validated upload into GridFS.

        Returns:
            StoredFile with the new id and its /files/<id> url

        Raises:
            StorageWriteError if the driver or the source stream fails;
            the partial GridFS object is aborted.
        """
        filename = build_filename(upload.field_name, upload.original_extension)
        metadata = {
            "originalName": upload.original_filename,
            "fieldName": upload.field_name,
            "uploadedAt": datetime.now(timezone.utc),
            "contentType": upload.mime_type,
        }

        grid_in = None
        try:
            grid_in = self.bucket.open_upload_stream(filename, metadata=metadata)
            upload.content.seek(0)
            while True:
                data = upload.content.read(self.chunk_size)
                if not data:
                    break
                grid_in.write(data)
            grid_in.close()
        except (PyMongoError, OSError) as e:
            logger.error("GridFS upload error", filename=filename, error=str(e))
            if grid_in is not None:
                try:
                    grid_in.abort()
                except PyMongoError as abort_error:
                    logger.warning(
                        "GridFS abort failed", filename=filename, error=str(abort_error)
                    )
            raise StorageWriteError(f"Failed to store {upload.field_name}") from e

        file_id = str(grid_in._id)
        logger.info(
            "File uploaded to GridFS",
            file_id=file_id,
            filename=filename,
            field_name=upload.field_name,
            size_bytes=upload.size_bytes,
        )
        return StoredFile(
            file_id=file_id,
            filename=filename,
            content_type=upload.mime_type,
            url=self.url_for(file_id),
            field_name=upload.field_name,
        )

    def open(self, file_id: str) -> StoredObject:
        """
        Open a stored file for streaming.

        Raises:
            NotFoundError for unknown or malformed ids
            StorageReadError if the lookup itself fails
        """
        oid = parse_file_id(file_id)
        try:
            grid_out = self.bucket.open_download_stream(oid)
        except NoFile:
            raise NotFoundError("File not found")
        except PyMongoError as e:
            logger.error("Error fetching file", file_id=file_id, error=str(e))
            raise StorageReadError("Error fetching file") from e
        return StoredObject(grid_out, self.chunk_size)
