"""
Category Handler

Fixed category list with published post counts.
"""

from fastapi import APIRouter

from bloghub.api.dependencies.services import PostServiceDep
from bloghub.shared.schemas.post import CategoriesResponse, CategoryCount


router = APIRouter()


@router.get("", response_model=CategoriesResponse)
async def list_categories(post_service: PostServiceDep):
    """Every category, zero counts included."""
    counts = await post_service.category_counts()
    return CategoriesResponse(
        categories=[CategoryCount(name=name, count=count) for name, count in counts]
    )
