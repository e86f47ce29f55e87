"""
News Routes

GET /news - Paged headlines (default: India, business)
GET /news/{category} - English headlines for one category
"""

from fastapi import APIRouter, Depends, Query

from jobportal.api.deps import get_news_client
from jobportal.services.news_client import NewsClient
from jobportal.schemas.schemas import NewsCategory, NewsResponse, error_responses

router = APIRouter(prefix="/news", tags=["News"], responses=error_responses(500, 503))


@router.get("", response_model=NewsResponse)
async def get_headlines(
    country: str = Query("in", min_length=2, max_length=2),
    category: NewsCategory = NewsCategory.business,
    page: int = Query(1, ge=1),
    pageSize: int = Query(12, ge=1, le=100),
    news: NewsClient = Depends(get_news_client),
):
    """Latest headlines for a country and category, paged."""
    result = await news.headlines(
        country=country,
        category=category.value,
        page=page,
        page_size=pageSize,
    )
    return NewsResponse(**result)


@router.get("/{category}", response_model=NewsResponse)
async def get_news_by_category(
    category: NewsCategory,
    news: NewsClient = Depends(get_news_client),
):
    """Top English headlines for a category (20 articles)."""
    result = await news.headlines_by_category(category.value)
    return NewsResponse(**result)
