"""Short-lived search sessions and per-flight context."""

from __future__ import annotations

import asyncio
import logging
import time
import uuid
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from navo_core.schemas import FlightResult

from ..store.keys import flight_key, session_key

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from navo_core.schemas import SearchSource

    from ..schemas.search import FlightSearchQuery
    from ..store import Store

logger = logging.getLogger(__name__)

SESSION_TTL = 15 * 60
FLIGHT_TTL = 10 * 60


@dataclass(frozen=True)
class StoredFlight:
    flight: FlightResult
    search_context: dict[str, Any] | None
    sid: str | None = None


class SessionService:
    """Sessions hold a search's parameters and flights; flights are also
    stored individually so detail pages work from a shared link."""

    def __init__(
        self,
        store: Store,
        *,
        session_ttl: int = SESSION_TTL,
        flight_ttl: int = FLIGHT_TTL,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._store = store
        self._session_ttl = session_ttl
        self._flight_ttl = flight_ttl
        self._clock = clock

    async def create_session(
        self,
        query: FlightSearchQuery,
        flights: Sequence[FlightResult],
        source: SearchSource,
    ) -> str:
        sid = uuid.uuid4().hex
        params = query.params()
        wire_flights = [f.to_wire() for f in flights]
        await self._store.set_json(
            session_key(sid),
            {
                "sid": sid,
                "params": params,
                "flights": wire_flights,
                "source": source.value,
                "createdAt": self._clock(),
            },
            ttl=self._session_ttl,
        )
        await asyncio.gather(
            *(
                self._store.set_json(
                    flight_key(flight["id"]),
                    {"flight": flight, "sid": sid, "params": params},
                    ttl=self._flight_ttl,
                )
                for flight in wire_flights
            )
        )
        logger.debug("Session %s created with %d flights", sid, len(flights))
        return sid

    async def get_session(self, sid: str) -> dict[str, Any] | None:
        return await self._store.get_json(session_key(sid))

    async def get_flight(self, flight_id: str) -> StoredFlight | None:
        data = await self._store.get_json(flight_key(flight_id))
        if data is None:
            return None
        return StoredFlight(
            flight=FlightResult.model_validate(data["flight"]),
            search_context=data.get("params"),
            sid=data.get("sid"),
        )

    async def get_flight_from_session(
        self, sid: str, flight_id: str
    ) -> StoredFlight | None:
        session = await self.get_session(sid)
        if session is None:
            return None
        for raw in session.get("flights", []):
            if raw.get("id") == flight_id:
                return StoredFlight(
                    flight=FlightResult.model_validate(raw),
                    search_context=session.get("params"),
                    sid=sid,
                )
        return None
