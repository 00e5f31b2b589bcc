from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from src.adapters.api.controllers.buses import router as buses_router
from src.adapters.api.dependencies import build_bus_state_service
from src.adapters.aws import env_bool
from src.domain.exceptions import StoreError, ValidationError


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    service = build_bus_state_service()
    app.state.bus_state_service = service
    try:
        yield
    finally:
        service.close()


app = FastAPI(title="BusTrack", lifespan=lifespan)
app.include_router(buses_router)


def _server_error(request: Request, exc: Exception, message: str) -> JSONResponse:
    logging.getLogger("uvicorn.error").error(
        message,
        exc_info=(type(exc), exc, exc.__traceback__),
        extra={"path": str(request.url.path)},
    )

    if env_bool("BUSTRACK_REVEAL_ERRORS", False):
        detail = str(exc) or exc.__class__.__name__
    else:
        detail = "Internal Server Error"

    return JSONResponse(status_code=500, content={"error": detail})


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": str(exc)})


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    return _server_error(request, exc, "Error updating ETA")


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Ensure API errors are JSON and never leak internals to the client."""

    return _server_error(request, exc, "Unhandled exception")


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
