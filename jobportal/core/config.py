"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

from functools import lru_cache
from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict

MB = 1024 * 1024


class Settings(BaseSettings):
    # MongoDB / GridFS
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_db: str = "job_portal"
    gridfs_bucket_name: str = "uploads"  # -> uploads.files / uploads.chunks
    users_collection: str = "users"

    # NewsAPI
    news_api_key: str = ""
    news_api_base_url: str = "https://newsapi.org/v2"
    news_timeout_seconds: float = 10.0

    # Resend (transactional email)
    email_api_key: str = ""
    email_api_base_url: str = "https://api.resend.com"
    email_from: str = "JobFinder <onboarding@resend.dev>"
    admin_email: str = "admin@jobfinder.local"
    email_timeout_seconds: float = 10.0

    # Upload limits
    max_resume_size: int = 5 * MB
    max_profile_photo_size: int = 2 * MB
    max_file_size: int = 5 * MB
    max_upload_size: int = 7 * MB
    max_files_per_request: int = 2
    # Headers and boundaries on top of max_upload_size before the body is cut off
    multipart_overhead_bytes: int = 64 * 1024
    allowed_resume_types: List[str] = [
        "application/pdf",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ]
    allowed_image_types: List[str] = ["image/jpeg", "image/jpg", "image/png"]
    allowed_resume_extensions: List[str] = [".pdf", ".doc", ".docx"]
    allowed_image_extensions: List[str] = [".jpg", ".jpeg", ".png"]
    file_stream_chunk_size: int = 255 * 1024

    # App
    api_prefix: str = ""
    cors_origins: List[str] = ["*"]
    debug: bool = True
    log_level: str = "INFO"
    log_json: bool = True

    @property
    def news_configured(self) -> bool:
        return bool(self.news_api_key)

    @property
    def email_configured(self) -> bool:
        return bool(self.email_api_key)

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
