# apps/api_server/routers/screener.py

from typing import Any, Dict
from fastapi import APIRouter, Body, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from apps.api_server.core.limiter import limiter
from apps.api_server.core.utils import elapsed_ms
from apps.api_server.dependencies.database import get_session
from apps.api_server.dependencies.screener import (
    get_screener_service,
    get_universe_provider,
)
from apps.api_server.schemas.screener import ErrorResponse, ScreenerResponse, SectorList
from apps.api_server.services.screener import ScreenerService
from apps.api_server.services.universe_store import load_universe
from packages.quant_lib.config import settings
from packages.quant_lib.logging import get_logger
from packages.screener.models import ScreenerQuery
from packages.screener.parsing import parse_flat_query, parse_structured_query
from packages.screener.universe import UniverseProvider
from packages.screener.vocabulary import Sector

logger = get_logger("screener_router")

router = APIRouter(prefix="/screener", tags=["Screener"])

ERROR_RESPONSES = {400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}


async def _execute(
    request: Request,
    query: ScreenerQuery,
    session: AsyncSession,
    provider: UniverseProvider,
    service: ScreenerService,
) -> ScreenerResponse:
    # Parsing already happened: a bad request never touches the store
    snapshot = await load_universe(session, provider)
    payload, cached = await service.execute(snapshot, query)

    return ScreenerResponse(
        total=payload["total"],
        results=payload["results"],
        execution_time_ms=elapsed_ms(request),
        cached=cached,
    )


@router.post(
    "/query",
    response_model=ScreenerResponse,
    responses=ERROR_RESPONSES,
    operation_id="run_screener_query",
)
@limiter.limit(settings.screener.query_rate_limit)
async def run_screener_query(
    request: Request,  # Required for limiter
    payload: Dict[str, Any] = Body(...),
    session: AsyncSession = Depends(get_session),
    provider: UniverseProvider = Depends(get_universe_provider),
    service: ScreenerService = Depends(get_screener_service),
):
    """
    Structured screener query:
    {"filters": {...}, "sort": {"field", "order"}, "limit": 100, "offset": 0}.
    """
    query = parse_structured_query(
        payload,
        default_limit=settings.screener.default_limit,
        max_limit=settings.screener.max_limit,
    )
    return await _execute(request, query, session, provider, service)


@router.get(
    "/query",
    response_model=ScreenerResponse,
    responses=ERROR_RESPONSES,
    operation_id="get_screener_query",
)
@limiter.limit(settings.screener.query_rate_limit)
async def get_screener_query(
    request: Request,  # Required for limiter
    session: AsyncSession = Depends(get_session),
    provider: UniverseProvider = Depends(get_universe_provider),
    service: ScreenerService = Depends(get_screener_service),
):
    """
    Query-string form, e.g.
    ?market_cap_min=1e10&pe_max=30&sector=Technology,Energy&sort_field=market_cap&limit=20
    """
    query = parse_flat_query(
        request.query_params,
        default_limit=settings.screener.default_limit,
        max_limit=settings.screener.max_limit,
    )
    return await _execute(request, query, session, provider, service)


@router.get("/sectors", response_model=SectorList, summary="List Screener Sectors")
async def get_sectors():
    """Sector names the filter UI offers. Records may carry sectors outside this list."""
    sectors = [sector.value for sector in Sector]
    return SectorList(sectors=sectors, total=len(sectors))
