from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from klooga_departures.adapters.api.controllers.departures import (
    router as departures_router,
)
from klooga_departures.adapters.settings import RuntimeSettings
from klooga_departures.domain.exceptions import (
    DeparturesError,
    MissingApiKey,
    MissingStationParameter,
    StationNotFound,
    UpstreamError,
)

UPSTREAM_FALLBACK_TEXT = "Transitland error"

app = FastAPI(
    title="Klooga departures",
    description="Today's remaining Elron trains between Lilleküla and Klooga/Kloogaranna.",
)
app.include_router(departures_router)


@app.exception_handler(MissingStationParameter)
async def missing_parameter_handler(
    request: Request, exc: MissingStationParameter
) -> PlainTextResponse:
    return PlainTextResponse(str(exc) or "Missing from/to", status_code=400)


@app.exception_handler(MissingApiKey)
async def missing_api_key_handler(request: Request, exc: MissingApiKey) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": str(exc)})


@app.exception_handler(StationNotFound)
async def station_not_found_handler(request: Request, exc: StationNotFound) -> JSONResponse:
    logging.getLogger("uvicorn.error").warning(
        "Station lookup failed: %s", exc, extra={"path": str(request.url.path)}
    )
    return JSONResponse(status_code=500, content={"detail": str(exc)})


@app.exception_handler(UpstreamError)
async def upstream_error_handler(request: Request, exc: UpstreamError) -> PlainTextResponse:
    logging.getLogger("uvicorn.error").warning(
        "Upstream error %s", exc.status_code, extra={"path": str(request.url.path)}
    )
    return PlainTextResponse(exc.text or UPSTREAM_FALLBACK_TEXT, status_code=502)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Ensure API errors are JSON so the display client can show them.

    Starlette's default 500 handler returns plain text without the cause.
    """

    logging.getLogger("uvicorn.error").exception(
        "Unhandled exception", extra={"path": str(request.url.path)}
    )

    reveal = RuntimeSettings.from_env().reveal_errors
    if reveal or isinstance(exc, (DeparturesError, RuntimeError, ValueError)):
        detail = str(exc) or exc.__class__.__name__
    else:
        detail = "Internal Server Error"

    return JSONResponse(status_code=500, content={"detail": detail})


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
