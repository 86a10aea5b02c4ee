from fastapi import APIRouter, Depends

from weather_informer.core.state import get_recent_searches
from weather_informer.schemas.search import RecentSearchesResponse
from weather_informer.services.recent_searches import RecentSearches

router = APIRouter(prefix="/recent-searches", tags=["Recent searches"])


@router.get(
    "",
    response_model=RecentSearchesResponse,
    summary="List recent searches",
    description="Returns up to five successful search queries, most recent first.",
)
def list_recent_searches(recent: RecentSearches = Depends(get_recent_searches)):
    return RecentSearchesResponse(items=recent.items)
