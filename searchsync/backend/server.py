from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..indexer.exceptions import InvalidPayload, SignatureException, SyncException
from ..schema import ErrorResponse, HealthStatus
from .routers.webhook import initialize_sync_service, shutdown_sync_service
from .routers.webhook import router as webhook_router


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    await initialize_sync_service()
    yield
    await shutdown_sync_service()


app = FastAPI(lifespan=lifespan)

app.include_router(webhook_router)


def error_response(status_code: int, exc: SyncException) -> JSONResponse:
    body = ErrorResponse(error=type(exc).__name__, detail=str(exc))
    return JSONResponse(status_code=status_code, content=body.model_dump())


@app.exception_handler(InvalidPayload)
async def invalid_payload_handler(_: Request, exc: InvalidPayload) -> JSONResponse:
    return error_response(400, exc)


@app.exception_handler(SignatureException)
async def signature_handler(_: Request, exc: SignatureException) -> JSONResponse:
    return error_response(401, exc)


@app.exception_handler(SyncException)
async def sync_exception_handler(_: Request, exc: SyncException) -> JSONResponse:
    return error_response(500, exc)


@app.get("/health")
async def health_check() -> HealthStatus:
    return HealthStatus(status="ok")
