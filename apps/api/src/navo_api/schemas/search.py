"""Flight search query validation and response schemas.

Bad input is an expected outcome, so :func:`validate_search_query` returns
a tagged result instead of raising.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from navo_core.schemas import CamelModel, FlightResult, SearchSource, TravelClass
from navo_ranking import DecisionStats, FlightDecision  # noqa: TC002

from .common import FieldError

if TYPE_CHECKING:
    from collections.abc import Mapping

_IATA_RE = re.compile(r"^[A-Z]{3}$")


class FlightSearchQuery(BaseModel):
    """Validated search parameters; field aliases match the query string."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    origin: str = Field(alias="from")
    destination: str = Field(alias="to")
    depart: date
    return_date: date | None = Field(default=None, alias="return")
    adults: int = Field(default=1, ge=1, le=9)
    max_results: int = Field(default=20, ge=1, le=50, alias="max")
    non_stop: bool | None = Field(default=None, alias="nonStop")
    cabin: TravelClass | None = None
    currency: str = Field(default="BRL", pattern=r"^[A-Z]{3}$")

    @field_validator("origin", "destination", mode="before")
    @classmethod
    def _iata(cls, value: Any) -> Any:
        if not isinstance(value, str):
            return value
        code = value.strip().upper()
        if not _IATA_RE.match(code):
            raise PydanticCustomError("iata", "Must be a 3-letter IATA airport code")
        return code

    @field_validator("cabin", "currency", mode="before")
    @classmethod
    def _upper(cls, value: Any) -> Any:
        return value.strip().upper() if isinstance(value, str) else value

    def params(self) -> dict[str, Any]:
        """Query-string form, used for cache keys and session context."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


@dataclass(frozen=True)
class ValidQuery:
    query: FlightSearchQuery
    ok: Literal[True] = True


@dataclass(frozen=True)
class InvalidQuery:
    errors: list[FieldError]
    ok: Literal[False] = False


SearchQueryResult = ValidQuery | InvalidQuery


def validate_search_query(params: Mapping[str, str]) -> SearchQueryResult:
    """Parse raw query parameters into a :class:`FlightSearchQuery`."""
    raw = {k: v for k, v in params.items() if v not in ("", None)}
    try:
        query = FlightSearchQuery.model_validate(raw)
    except ValidationError as exc:
        return InvalidQuery(
            [
                FieldError(
                    field=".".join(str(part) for part in err["loc"]) or "query",
                    message=err["msg"],
                )
                for err in exc.errors()
            ]
        )

    errors: list[FieldError] = []
    if query.origin == query.destination:
        errors.append(
            FieldError(field="to", message="Destination must differ from origin")
        )
    if query.return_date is not None and query.return_date < query.depart:
        errors.append(
            FieldError(field="return", message="Return date must not precede departure")
        )
    if errors:
        return InvalidQuery(errors)
    return ValidQuery(query)


class SearchMeta(CamelModel):
    count: int
    duration_ms: int
    cached: bool
    warning: str | None = None


class FlightSearchResponse(CamelModel):
    flights: list[FlightResult]
    decisions: dict[str, FlightDecision]
    stats: DecisionStats | None = None
    source: SearchSource
    sid: str | None = None
    meta: SearchMeta
    request_id: str | None = None
