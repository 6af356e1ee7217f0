"""FastAPI dependency injection providers."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from .container import ServiceContainer
from .middleware.request_id import get_request_id
from .services.flight_lookup import FlightLookupService
from .services.popular_routes import PopularRoutesService
from .services.search_service import SearchService
from .services.smart_routes import SmartRoutesService


def get_container(request: Request) -> ServiceContainer:
    """Container built by :func:`navo_api.main.create_app`."""
    return request.app.state.container


ContainerDep = Annotated[ServiceContainer, Depends(get_container)]


def get_search_service(container: ContainerDep) -> SearchService:
    return container.search


def get_flight_lookup(container: ContainerDep) -> FlightLookupService:
    return container.flight_lookup


def get_popular_routes(container: ContainerDep) -> PopularRoutesService:
    return container.popular_routes


def get_smart_routes(container: ContainerDep) -> SmartRoutesService:
    return container.smart_routes


RequestIdDep = Annotated[str, Depends(get_request_id)]
SearchServiceDep = Annotated[SearchService, Depends(get_search_service)]
FlightLookupDep = Annotated[FlightLookupService, Depends(get_flight_lookup)]
PopularRoutesDep = Annotated[PopularRoutesService, Depends(get_popular_routes)]
SmartRoutesDep = Annotated[SmartRoutesService, Depends(get_smart_routes)]
