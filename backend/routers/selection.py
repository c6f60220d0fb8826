from fastapi import APIRouter, Depends, HTTPException

from models.presentation import PresentationRecord, SelectRequest
from routers.dependencies import get_context
from services.context import AppContext

router = APIRouter(prefix="/selection", tags=["selection"])


@router.get("", response_model=PresentationRecord)
async def current_selection(ctx: AppContext = Depends(get_context)):
    return ctx.selection.current()


@router.post("", response_model=PresentationRecord)
async def select_country(req: SelectRequest, ctx: AppContext = Depends(get_context)):
    if not req.name.strip():
        raise HTTPException(status_code=400, detail="Name cannot be empty")
    return ctx.selection.select(req.name)


@router.delete("", response_model=PresentationRecord)
async def clear_selection(ctx: AppContext = Depends(get_context)):
    return ctx.selection.clear()
