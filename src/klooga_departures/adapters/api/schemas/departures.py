from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class TripSchema(BaseModel):
    origin_departure_time: str
    destination_arrival_time: str
    route_name: str | None = None
    route_onestop_id: str | None = None
    # Wire name kept for existing clients.
    headsig: str | None = None


class DeparturesResponseSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    trips: list[TripSchema]
    origin: str = Field(..., alias="from")
    destination: str = Field(..., alias="to")


class RouteChoiceSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    label: str
    origin: str = Field(..., alias="from")
    destination: str = Field(..., alias="to")


class ErrorSchema(BaseModel):
    error: str
