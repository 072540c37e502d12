"""Reference data API routes.

Read-only views over the static catalog:
- GET /categories
- GET /leaderboard?category=seo&tags=meta-descriptions,title-tags&limit=50
- GET /prompt-suggestions?limit=10
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from arena.api.deps import get_random_source
from arena.errors import ApiErrorCode, InvalidRequestError
from arena.responses import success_response
from arena.schemas.reference import (
    CategoryOut,
    LeaderboardEntryOut,
    LeaderboardOut,
    PromptSuggestionOut,
)
from arena.services import catalog
from arena.services.randomness import RandomSource

router = APIRouter(tags=["reference"])


@router.get("/categories")
async def list_categories() -> dict:
    """List all categories with their tags, in sort order."""
    categories = sorted(catalog.CATEGORIES, key=lambda c: c.sort_order)
    return success_response(
        [CategoryOut.model_validate(c, from_attributes=True).model_dump() for c in categories]
    )


@router.get("/leaderboard")
async def get_leaderboard(
    random_source: Annotated[RandomSource, Depends(get_random_source)],
    category: str | None = Query(default=None, description="Category slug (required)"),
    tags: str | None = Query(default=None, description="Comma-separated tag slugs"),
    limit: int = Query(default=50, description="Maximum entries (capped at 100)"),
) -> dict:
    """Leaderboard for one category.

    Errors:
        E_CATEGORY_REQUIRED (400): category parameter missing.
        E_CATEGORY_NOT_FOUND (404): No category with that slug.
    """
    if not category:
        raise InvalidRequestError(
            ApiErrorCode.E_CATEGORY_REQUIRED, "category parameter is required"
        )
    catalog.get_category(category)

    tag_list = [t.strip() for t in tags.split(",") if t.strip()] if tags else []
    limit = max(0, min(limit, catalog.MAX_LEADERBOARD_ENTRIES))
    entries = catalog.generate_leaderboard(category, random_source)[:limit]

    result = LeaderboardOut(
        category=category,
        tags=tag_list,
        entries=[LeaderboardEntryOut(**e) for e in entries],
    )
    return success_response(result.model_dump())


@router.get("/prompt-suggestions")
async def list_prompt_suggestions(
    random_source: Annotated[RandomSource, Depends(get_random_source)],
    limit: int = Query(default=10, description="Maximum suggestions (capped at 50)"),
) -> dict:
    """Random prompt suggestions for the landing screen."""
    suggestions = catalog.random_suggestions(limit, random_source)
    return success_response(
        [
            PromptSuggestionOut.model_validate(s, from_attributes=True).model_dump()
            for s in suggestions
        ]
    )
