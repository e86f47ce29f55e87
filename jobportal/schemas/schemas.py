"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
Field names follow the frontend's camelCase JSON where it already exists
(fileId, totalResults, pageSize ...).
"""

from pydantic import BaseModel, Field
from typing import Optional, List, Any, Dict
from enum import Enum


# ============================================================
# ENUMS
# ============================================================

class UploadField(str, Enum):
    resume = "resume"
    profile_photo = "profilePhoto"


class NewsCategory(str, Enum):
    business = "business"
    entertainment = "entertainment"
    general = "general"
    health = "health"
    science = "science"
    sports = "sports"
    technology = "technology"


# ============================================================
# UPLOAD / FILE SCHEMAS
# ============================================================

class StoredFileResponse(BaseModel):
    fieldName: UploadField
    fileId: str
    filename: str
    url: str

class UploadResponse(BaseModel):
    success: bool = True
    files: List[StoredFileResponse]


# ============================================================
# CONTACT SCHEMAS
# ============================================================

class ContactRequest(BaseModel):
    # All optional so that missing fields surface as our own 400,
    # not FastAPI's 422
    name: Optional[str] = None
    email: Optional[str] = None
    subject: Optional[str] = None
    message: Optional[str] = None


# ============================================================
# NEWS SCHEMAS
# ============================================================

class NewsResponse(BaseModel):
    success: bool = True
    articles: List[Any] = []
    totalResults: Optional[int] = None
    page: Optional[int] = None
    pageSize: Optional[int] = None


# ============================================================
# HEALTH SCHEMAS
# ============================================================

class HealthResponse(BaseModel):
    status: str
    mongodb: str
    news_configured: bool
    email_configured: bool


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class MessageResponse(BaseModel):
    message: str
    success: bool = True


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    error: Optional[str] = Field(None, description="Upstream provider detail, if any")


def error_responses(*status_codes: int) -> Dict[int, Dict[str, Any]]:
    """`responses=` entries documenting the error body for each status code."""
    return {code: {"model": ErrorResponse} for code in status_codes}
