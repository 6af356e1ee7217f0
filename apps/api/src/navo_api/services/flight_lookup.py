"""Flight detail lookup with progressively more expensive fallbacks."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..logging_config import RequestLogger
from ..schemas.search import ValidQuery, validate_search_query
from .search_service import SearchFailedError
from .session_service import StoredFlight

if TYPE_CHECKING:
    from collections.abc import Mapping
    from typing import Literal

    from .search_service import SearchService
    from .session_service import SessionService

    LookupSource = Literal["store", "session", "refetch"]

logger = logging.getLogger(__name__)


class FlightLookupService:
    """Resolve a flight id: flight key, then session, then a fresh search.

    Store failures propagate; the flight context is required state.
    """

    def __init__(self, sessions: SessionService, search: SearchService) -> None:
        self._sessions = sessions
        self._search = search

    async def find(
        self,
        flight_id: str,
        *,
        sid: str | None = None,
        params: Mapping[str, str] | None = None,
        request_id: str | None = None,
    ) -> tuple[StoredFlight, LookupSource] | None:
        log = RequestLogger(logger, request_id)

        stored = await self._sessions.get_flight(flight_id)
        if stored is not None:
            return stored, "store"

        if sid:
            stored = await self._sessions.get_flight_from_session(sid, flight_id)
            if stored is not None:
                return stored, "session"

        if params and {"from", "to", "depart"} <= params.keys():
            result = validate_search_query(params)
            if isinstance(result, ValidQuery):
                try:
                    response = await self._search.search(
                        result.query, request_id=request_id
                    )
                except SearchFailedError as exc:
                    log.warning(
                        "FLIGHT_REFETCH_FAILED", flight_id=flight_id, code=exc.code
                    )
                else:
                    for flight in response.flights:
                        if flight.id == flight_id:
                            return (
                                StoredFlight(
                                    flight, result.query.params(), response.sid
                                ),
                                "refetch",
                            )

        log.info("FLIGHT_CONTEXT_MISSING", flight_id=flight_id, has_sid=bool(sid))
        return None
