"""
FastAPI REST API for OpenSearch Navigator.

Compiles structured filters into OpenSearch queries and executes them
against signed, failover-capable connections.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from opensearch_navigator import NavigatorOrchestrator
from opensearch_navigator.config import get_settings
from opensearch_navigator.core.errors import NavigatorError
from opensearch_navigator.core.models import (
    AuthMode,
    CollectionRecord,
    ConnectionProfile,
    FilterState,
    IndexInfo,
    SearchPage,
)
from opensearch_navigator.logging_config import setup_logging
from opensearch_navigator.schema.type_mappings import TypeMapper


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    yield


app = FastAPI(
    lifespan=lifespan,
    title="OpenSearch Navigator API",
    description="Build filters, compile them to OpenSearch DSL and browse results",
    version="1.0.0",
)


class StaticCredentials(BaseModel):
    """Static key triple supplied by the client."""
    access_key: str = ""
    secret_key: str = ""
    session_token: Optional[str] = None


class ConnectionRequest(BaseModel):
    """Request model carrying only a connection profile."""
    connection: ConnectionProfile


class SearchRequest(BaseModel):
    """Request model for compiling or running a search."""
    connection: ConnectionProfile = Field(default_factory=ConnectionProfile)
    filters: FilterState = Field(default_factory=FilterState)


class DiscoveryRequest(BaseModel):
    """Request model for listing serverless collections."""
    region: Optional[str] = None
    auth_mode: AuthMode = AuthMode.PROFILE
    profile: Optional[str] = None
    credentials: Optional[StaticCredentials] = None


class DiscoveryResponse(BaseModel):
    region: str
    collections: List[CollectionRecord]
    empty: bool


class ProxyRequest(BaseModel):
    """Request model for forwarding a raw request to an absolute URL."""
    url: str
    method: str = "GET"
    data: Any = None
    region: Optional[str] = None
    auth_mode: AuthMode = AuthMode.PROFILE
    profile: Optional[str] = None
    credentials: Optional[StaticCredentials] = None


class FieldResponse(BaseModel):
    path: str
    type: Optional[str] = None
    operators: List[str] = Field(default_factory=list)


def get_orchestrator() -> NavigatorOrchestrator:
    """Create the orchestrator used by a request."""
    return NavigatorOrchestrator()


@app.exception_handler(NavigatorError)
async def navigator_error_handler(request: Request, exc: NavigatorError):
    logger.warning("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.http_status, content=exc.to_dict())


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
    return JSONResponse(status_code=400, content={"error": "BadRequest", "message": str(exc)})


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.get("/api/aws-profiles")
async def aws_profiles(orchestrator: NavigatorOrchestrator = Depends(get_orchestrator)):
    """List locally configured AWS profiles. A missing store yields an empty list."""
    return {"profiles": orchestrator.list_profiles()}


@app.post("/api/aws-discovery", response_model=DiscoveryResponse)
async def aws_discovery(
    request: DiscoveryRequest,
    orchestrator: NavigatorOrchestrator = Depends(get_orchestrator),
):
    """List OpenSearch Serverless collections for a region."""
    credentials = request.credentials or StaticCredentials()
    result = await orchestrator.discover(
        region=request.region,
        auth_mode=request.auth_mode,
        profile_name=request.profile,
        access_key=credentials.access_key,
        secret_key=credentials.secret_key,
        session_token=credentials.session_token,
    )
    return DiscoveryResponse(
        region=result.region,
        collections=result.collections,
        empty=result.is_empty,
    )


@app.post("/api/compile")
async def compile_query(
    request: SearchRequest,
    orchestrator: NavigatorOrchestrator = Depends(get_orchestrator),
) -> Dict[str, Any]:
    """Return the query document a search would send, without sending it."""
    return orchestrator.compile(request.filters, request.connection)


@app.post("/api/search", response_model=SearchPage)
async def search(
    request: SearchRequest,
    orchestrator: NavigatorOrchestrator = Depends(get_orchestrator),
):
    """Run a search and return one page of hits."""
    return await orchestrator.search(request.connection, request.filters)


@app.post("/api/mapping", response_model=List[FieldResponse])
async def mapping(
    request: ConnectionRequest,
    orchestrator: NavigatorOrchestrator = Depends(get_orchestrator),
):
    """List the index's leaf fields with the operators each supports."""
    fields = await orchestrator.get_mapping(request.connection)
    return [
        FieldResponse(
            path=field.path,
            type=field.type,
            operators=TypeMapper.operators_for(field.type or ""),
        )
        for field in fields
    ]


@app.post("/api/indices", response_model=List[IndexInfo])
async def indices(
    request: ConnectionRequest,
    orchestrator: NavigatorOrchestrator = Depends(get_orchestrator),
):
    """List indices available on the connection."""
    return await orchestrator.list_indices(request.connection)


@app.post("/api/proxy")
async def proxy(
    request: ProxyRequest,
    orchestrator: NavigatorOrchestrator = Depends(get_orchestrator),
):
    """Forward a raw request to an absolute URL, signed when credentials resolve."""
    credentials = request.credentials or StaticCredentials()
    response = await orchestrator.proxy(
        url=request.url,
        method=request.method,
        body=request.data,
        region=request.region,
        auth_mode=request.auth_mode,
        profile_name=request.profile,
        access_key=credentials.access_key,
        secret_key=credentials.secret_key,
        session_token=credentials.session_token,
    )
    return {"status": response.status, "data": response.data}


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
