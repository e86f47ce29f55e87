"""
Schemas module - Request/Response schemas for API endpoints.
"""

from jobportal.schemas.schemas import (
    ContactRequest,
    ErrorResponse,
    error_responses,
    HealthResponse,
    MessageResponse,
    NewsCategory,
    NewsResponse,
    StoredFileResponse,
    UploadField,
    UploadResponse,
)

__all__ = [
    "ContactRequest",
    "ErrorResponse",
    "error_responses",
    "HealthResponse",
    "MessageResponse",
    "NewsCategory",
    "NewsResponse",
    "StoredFileResponse",
    "UploadField",
    "UploadResponse",
]
