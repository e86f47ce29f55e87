"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from jobportal.api.routes.upload_routes import router as upload_router
from jobportal.api.routes.file_routes import router as file_router
from jobportal.api.routes.resume_routes import router as resume_router
from jobportal.api.routes.contact_routes import router as contact_router
from jobportal.api.routes.news_routes import router as news_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(upload_router)
api_router.include_router(file_router)
api_router.include_router(resume_router)
api_router.include_router(contact_router)
api_router.include_router(news_router)
