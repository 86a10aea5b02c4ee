from fastapi import Request

from weather_informer.services.recent_searches import RecentSearches
from weather_informer.services.search_state import SearchState


# ---------------------------------------------------------------------
# Application-owned state
# ---------------------------------------------------------------------

# Both objects live on `app.state` (see `create_app`) and are handed to
# routers through these dependencies instead of module-level globals.


def get_recent_searches(request: Request) -> RecentSearches:
    return request.app.state.recent_searches


def get_search_state(request: Request) -> SearchState:
    return request.app.state.search_state
