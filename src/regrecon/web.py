"""HTTP surface for the registry service."""

from __future__ import annotations

from contextlib import asynccontextmanager
from logging import getLogger
from typing import TYPE_CHECKING, Annotated

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel, ConfigDict, Field

from regrecon import __version__
from regrecon.service import (
    AuthoritativeLookupRequest,
    PreliminaryLookupRequest,
    ReconcileRequest,
    RegistryService,
)

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from regrecon.service import RegistryRequest, RegistryResponse

log = getLogger(__name__)

bearer = HTTPBearer(auto_error=False)


class QueryBody(BaseModel):
    """Body shared by every registry endpoint; validation happens in the service."""

    model_config = ConfigDict(extra="ignore")

    date: str | None = Field(default=None, description="Registration date, YYYY-MM-DD")
    region: str | None = Field(default=None, description="Two-letter federative unit")


def get_service(request: Request) -> RegistryService:
    return request.app.state.service


def get_credentials(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer)],
) -> str | None:
    return credentials.credentials if credentials else None


ServiceDep = Annotated[RegistryService, Depends(get_service)]
CredentialsDep = Annotated[str | None, Depends(get_credentials)]


def _respond(response: RegistryResponse) -> JSONResponse:
    return JSONResponse(status_code=response.status_code, content=response.to_payload())


async def _dispatch(service: RegistryService, request: RegistryRequest) -> JSONResponse:
    return _respond(await service.handle(request))


def create_app(service: RegistryService) -> FastAPI:
    """Build the FastAPI application around an already wired service."""

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        try:
            yield
        finally:
            log.info("Closing registry source clients")
            await service.aclose()

    app = FastAPI(title="regrecon", version=__version__, lifespan=lifespan)
    app.state.service = service

    @app.exception_handler(RequestValidationError)
    async def _invalid_body(_request: Request, exc: RequestValidationError) -> JSONResponse:
        log.info("Rejected malformed request body: %s", exc.errors())
        return JSONResponse(
            status_code=400,
            content={"success": False, "error": "Malformed request body"},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok", "version": __version__}

    @app.post("/reconcile")
    async def reconcile(
        registry: ServiceDep,
        credentials: CredentialsDep,
        body: QueryBody | None = None,
    ) -> JSONResponse:
        query = body or QueryBody()
        request = ReconcileRequest(date=query.date, region=query.region, credentials=credentials)
        return await _dispatch(registry, request)

    @app.post("/sources/authoritative")
    async def authoritative_lookup(
        registry: ServiceDep,
        credentials: CredentialsDep,
        body: QueryBody | None = None,
    ) -> JSONResponse:
        query = body or QueryBody()
        request = AuthoritativeLookupRequest(
            date=query.date, region=query.region, credentials=credentials
        )
        return await _dispatch(registry, request)

    @app.post("/sources/preliminary")
    async def preliminary_lookup(
        registry: ServiceDep,
        credentials: CredentialsDep,
        body: QueryBody | None = None,
    ) -> JSONResponse:
        query = body or QueryBody()
        request = PreliminaryLookupRequest(
            date=query.date, region=query.region, credentials=credentials
        )
        return await _dispatch(registry, request)

    return app


def create_default_app() -> FastAPI:
    """Factory for ``uvicorn --factory regrecon.web:create_default_app``."""

    from regrecon.app import build_service  # noqa: PLC0415

    return create_app(build_service())
