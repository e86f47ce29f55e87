"""
File Upload Utility - Validate resume / profile photo uploads.

Accepted fields:
- resume        (.pdf, .doc, .docx)   default max 5MB
- profilePhoto  (.jpg, .jpeg, .png)   default max 2MB

At most 2 files per request. Every check runs before anything is
written to GridFS, so a rejected request never leaves a partial object.
"""

import os
from dataclasses import dataclass
from typing import BinaryIO, Dict, List

import structlog

from jobportal.core.config import Settings
from jobportal.core.exceptions import (
    FileTooLargeError,
    InvalidExtensionError,
    InvalidFieldError,
    InvalidMimeTypeError,
    TooManyFilesError,
    ValidationError,
)

logger = structlog.get_logger(__name__)

RESUME_FIELD = "resume"
PROFILE_PHOTO_FIELD = "profilePhoto"
UPLOAD_FIELDS = (RESUME_FIELD, PROFILE_PHOTO_FIELD)


@dataclass
class FieldRule:
    mime_types: List[str]
    extensions: List[str]
    max_size: int
    label: str  # human readable set for error messages


@dataclass
class UploadRequest:
    """One file part of a multipart upload, not yet stored."""
    field_name: str
    original_filename: str
    mime_type: str
    size_bytes: int
    content: BinaryIO

    @property
    def extension(self) -> str:
        return get_file_extension(self.original_filename)

    @property
    def original_extension(self) -> str:
        """Extension as the client sent it (case kept), used in stored names."""
        return os.path.splitext(self.original_filename or "")[1]


def get_file_extension(filename: str) -> str:
    """Get lowercase file extension ('' when there is none)."""
    return os.path.splitext(filename or "")[1].lower()


def measure(stream: BinaryIO) -> int:
    """Size of a seekable stream in bytes; leaves the position at 0."""
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(0)
    return size


def field_rules(settings: Settings) -> Dict[str, FieldRule]:
    """Allowed types/extensions/size per upload field."""
    return {
        RESUME_FIELD: FieldRule(
            mime_types=settings.allowed_resume_types,
            extensions=settings.allowed_resume_extensions,
            max_size=min(settings.max_resume_size, settings.max_file_size),
            label="PDF, DOC, DOCX",
        ),
        PROFILE_PHOTO_FIELD: FieldRule(
            mime_types=settings.allowed_image_types,
            extensions=settings.allowed_image_extensions,
            max_size=min(settings.max_profile_photo_size, settings.max_file_size),
            label="JPG, PNG",
        ),
    }


def validate_file(upload: UploadRequest, settings: Settings) -> None:
    """
    Check a single upload against its field's rules.

    Raises:
        InvalidFieldError, InvalidMimeTypeError, InvalidExtensionError,
        FileTooLargeError
    """
    rule = field_rules(settings).get(upload.field_name)
    if rule is None:
        logger.warning("Invalid file field", field_name=upload.field_name)
        raise InvalidFieldError(upload.field_name)

    if upload.mime_type not in rule.mime_types:
        logger.warning(
            "Invalid file type",
            field_name=upload.field_name,
            mime_type=upload.mime_type,
        )
        raise InvalidMimeTypeError(upload.field_name, upload.mime_type, rule.label)

    # Checked on its own: a correct MIME type does not excuse a wrong extension
    ext = upload.extension
    if ext not in rule.extensions:
        logger.warning("Invalid file extension", field_name=upload.field_name, extension=ext)
        raise InvalidExtensionError(upload.field_name, ext)

    if upload.size_bytes > rule.max_size:
        logger.warning(
            "File too large",
            field_name=upload.field_name,
            size_bytes=upload.size_bytes,
            limit_bytes=rule.max_size,
        )
        raise FileTooLargeError(upload.size_bytes, rule.max_size, upload.field_name)


def validate_uploads(uploads: List[UploadRequest], settings: Settings) -> None:
    """
    Validate a whole request: file count, each file, then aggregate size.

    Raises:
        ValidationError (or one of its subclasses)
    """
    if not uploads:
        raise ValidationError(
            f"No file uploaded. Expected one of: {', '.join(UPLOAD_FIELDS)}"
        )

    if len(uploads) > settings.max_files_per_request:
        raise TooManyFilesError(len(uploads), settings.max_files_per_request)

    for upload in uploads:
        validate_file(upload, settings)

    total = sum(u.size_bytes for u in uploads)
    if total > settings.max_upload_size:
        raise FileTooLargeError(total, settings.max_upload_size)


def get_supported_formats(settings: Settings) -> dict:
    """Get info about accepted upload formats per field."""
    return {
        field: {
            "mime_types": rule.mime_types,
            "extensions": rule.extensions,
            "max_size_bytes": rule.max_size,
        }
        for field, rule in field_rules(settings).items()
    } | {
        "max_files_per_request": settings.max_files_per_request,
        "max_upload_size_bytes": settings.max_upload_size,
    }
