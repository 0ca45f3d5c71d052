from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from klooga_departures.adapters.api.dependencies import get_departures_service
from klooga_departures.adapters.api.schemas.departures import (
    DeparturesResponseSchema,
    ErrorSchema,
    RouteChoiceSchema,
    TripSchema,
)
from klooga_departures.app.services.departures_service import DeparturesService

router = APIRouter(tags=["departures"])


@router.get(
    "/departures",
    response_model=DeparturesResponseSchema,
    response_model_exclude_none=True,
    responses={
        400: {"description": "Missing from/to"},
        500: {"model": ErrorSchema, "description": "TRANSITLAND_API_KEY not set"},
        502: {"description": "Transitland error, upstream body passed through"},
    },
)
async def list_departures(
    from_: str | None = Query(default=None, alias="from"),
    to: str | None = Query(default=None),
    service: DeparturesService = Depends(get_departures_service),
) -> DeparturesResponseSchema:
    board = await service.list_departures(origin=from_, destination=to)
    return DeparturesResponseSchema(
        trips=[
            TripSchema(
                origin_departure_time=d.origin_departure_time,
                destination_arrival_time=d.destination_arrival_time,
                route_name=d.route_name,
                route_onestop_id=d.route_onestop_id,
                headsig=d.headsign,
            )
            for d in board.departures
        ],
        origin=board.origin,
        destination=board.destination,
    )


@router.get("/routes", response_model=list[RouteChoiceSchema])
def list_routes(
    service: DeparturesService = Depends(get_departures_service),
) -> list[RouteChoiceSchema]:
    return [
        RouteChoiceSchema(label=r.label, origin=r.origin, destination=r.destination)
        for r in service.list_routes()
    ]
