"""
FastAPI dependencies - hand the startup-built services to route handlers.

Everything here reads from app.state, which main.lifespan fills once.
Tests replace these with app.dependency_overrides.

Usage:
    @router.get("/files/{file_id}")
    def get_file(file_id: str, store: FileStore = Depends(get_file_store)):
        ...
"""

from fastapi import Request

from jobportal.core.config import Settings
from jobportal.services.file_storage import FileStore
from jobportal.services.mailer import ResendMailer
from jobportal.services.news_client import NewsClient
from jobportal.services.user_service import UserService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_file_store(request: Request) -> FileStore:
    return request.app.state.file_store


def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service


def get_news_client(request: Request) -> NewsClient:
    return request.app.state.news_client


def get_mailer(request: Request) -> ResendMailer:
    return request.app.state.mailer
