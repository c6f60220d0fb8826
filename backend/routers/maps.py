from fastapi import APIRouter, Depends, HTTPException, Query

from models.presentation import MapRender
from routers.dependencies import get_context
from services.context import AppContext

router = APIRouter(prefix="/map", tags=["map"])

MAP_UNAVAILABLE = "No se pudo cargar el mapa base."


def _require_map(ctx: AppContext) -> None:
    if not ctx.geography.loaded:
        raise HTTPException(status_code=503, detail=MAP_UNAVAILABLE)


@router.get("/features")
async def get_features(ctx: AppContext = Depends(get_context)):
    _require_map(ctx)
    return ctx.geography.collection


@router.get("/render", response_model=MapRender)
async def render_map(
    width: int = Query(..., gt=0, le=10000),
    height: int = Query(..., gt=0, le=10000),
    ctx: AppContext = Depends(get_context),
):
    _require_map(ctx)
    if not ctx.geography.collection["features"]:
        raise HTTPException(status_code=503, detail=MAP_UNAVAILABLE)
    return ctx.geography.render(width, height, selected=ctx.selection.selected)
