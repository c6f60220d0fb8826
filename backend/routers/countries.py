from fastapi import APIRouter, Depends, HTTPException

from models.country import CountryInfo
from routers.dependencies import get_context
from services.context import AppContext

router = APIRouter(prefix="/countries", tags=["countries"])


@router.get("", response_model=list[CountryInfo])
async def list_countries(ctx: AppContext = Depends(get_context)):
    return ctx.table.all()


@router.get("/{name}", response_model=CountryInfo)
async def get_country(name: str, ctx: AppContext = Depends(get_context)):
    country = ctx.resolver.resolve(name)
    if not country:
        raise HTTPException(status_code=404, detail="País no disponible")
    return country
