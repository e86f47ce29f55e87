"""
Application exceptions.

Every error a route can surface derives from JobPortalError and carries the
HTTP status it maps to. main.py registers a single handler that renders them
as {"success": false, "message": ...}.
"""

from typing import Optional


class JobPortalError(Exception):
    """Base class for all application errors."""

    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


# ============================================================
# VALIDATION (400)
# ============================================================

class ValidationError(JobPortalError):
    status_code = 400


class InvalidFieldError(ValidationError):
    def __init__(self, field_name: str) -> None:
        self.field_name = field_name
        super().__init__("Invalid file field name")


class InvalidMimeTypeError(ValidationError):
    def __init__(self, field_name: str, mime_type: str, expected: str) -> None:
        self.field_name = field_name
        self.mime_type = mime_type
        self.expected = expected
        super().__init__(f"Only {expected} files are allowed for {field_name}")


class InvalidExtensionError(ValidationError):
    def __init__(self, field_name: str, extension: str) -> None:
        self.field_name = field_name
        self.extension = extension
        super().__init__(f"Invalid file extension: {extension or '(none)'}")


class FileTooLargeError(ValidationError):
    def __init__(self, size_bytes: int, limit_bytes: int, field_name: Optional[str] = None) -> None:
        self.size_bytes = size_bytes
        self.limit_bytes = limit_bytes
        self.field_name = field_name
        target = f"{field_name} file" if field_name else "Upload"
        super().__init__(
            f"{target} too large: {size_bytes} bytes (maximum {limit_bytes} bytes)"
        )


class TooManyFilesError(ValidationError):
    def __init__(self, count: int, limit: int) -> None:
        self.count = count
        self.limit = limit
        super().__init__(f"Too many files: {count} (maximum {limit} per request)")


# ============================================================
# LOOKUP (404)
# ============================================================

class NotFoundError(JobPortalError):
    status_code = 404


# ============================================================
# EXTERNAL SERVICES / CONFIG
# ============================================================

class UpstreamServiceError(JobPortalError):
    """An external provider (NewsAPI, Resend) failed."""

    status_code = 500

    def __init__(self, service: str, message: str, detail: Optional[str] = None) -> None:
        self.service = service
        self.detail = detail
        super().__init__(message)


class ConfigurationError(JobPortalError):
    """A required provider key is missing."""

    status_code = 503


# ============================================================
# STORAGE (500)
# ============================================================

class StorageError(JobPortalError):
    status_code = 500


class StorageWriteError(StorageError):
    pass


class StorageReadError(StorageError):
    pass

