from __future__ import annotations

import itertools
import logging
from typing import Optional, Set

from weather_informer.core.errors import error_kind, to_user_message
from weather_informer.schemas.forecast import ForecastResult, SearchError

logger = logging.getLogger(__name__)


class SearchState:
    """
    Single "current result" slot shared by all searches.

    Every search takes a monotonic ticket before fetching. A finished
    search only updates the slot when its ticket is newer than the last
    outcome recorded, so a slow earlier request can never overwrite the
    result (or error) of a faster later one.

    A failure keeps the last good result and sets `error`; the next
    success clears it.
    """

    def __init__(self):
        self._tickets = itertools.count(1)
        self._in_flight: Set[int] = set()
        self._latest = 0
        self.current: Optional[ForecastResult] = None
        self.error: Optional[SearchError] = None

    @property
    def loading(self) -> bool:
        return bool(self._in_flight)

    def begin(self) -> int:
        ticket = next(self._tickets)
        self._in_flight.add(ticket)
        return ticket

    def _is_stale(self, ticket: int) -> bool:
        if ticket <= self._latest:
            logger.info("Discarding stale outcome for search #%d (current is #%d)", ticket, self._latest)
            return True
        self._latest = ticket
        return False

    def publish(self, ticket: int, result: ForecastResult) -> bool:
        """
        Store `result` if `ticket` is the newest outcome so far.
        """
        if self._is_stale(ticket):
            return False
        self.current = result
        self.error = None
        return True

    def fail(self, ticket: int, exc: BaseException) -> bool:
        """
        Record the failure of search `ticket` if it is the newest outcome so far.
        """
        if self._is_stale(ticket):
            return False
        self.error = SearchError(kind=error_kind(exc), message=to_user_message(exc), sequence=ticket)
        return True

    def finish(self, ticket: int) -> None:
        self._in_flight.discard(ticket)
