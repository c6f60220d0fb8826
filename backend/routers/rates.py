import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from models.rates import RateSnapshot
from routers.dependencies import get_context
from services.context import AppContext
from utils.http_client import FetchError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/rates", tags=["rates"])

limiter = Limiter(key_func=get_remote_address)

RATES_UNAVAILABLE = "No se pudieron cargar las cotizaciones."


@router.get("", response_model=RateSnapshot)
async def get_rates(ctx: AppContext = Depends(get_context)):
    snapshot = ctx.store.snapshot
    if snapshot is None:
        raise HTTPException(status_code=503, detail=RATES_UNAVAILABLE)
    return snapshot


@router.post("/refresh", response_model=RateSnapshot)
@limiter.limit("6/minute")
async def refresh_rates(request: Request, ctx: AppContext = Depends(get_context)):
    try:
        return await ctx.store.refresh(ctx.fetcher)
    except FetchError as e:
        logger.warning("Manual rate refresh failed (%s): %s", e.kind.value, e)
        raise HTTPException(status_code=502, detail=RATES_UNAVAILABLE)
