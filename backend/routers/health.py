import time
from fastapi import APIRouter, Depends

from routers.dependencies import get_context
from services.context import AppContext

router = APIRouter()

_start_time = time.time()


@router.get("/health")
async def health_check(ctx: AppContext = Depends(get_context)):
    snapshot = ctx.store.snapshot
    return {
        "status": "ok",
        "uptime_seconds": round(time.time() - _start_time),
        "version": ctx.settings.version,
        "phase": ctx.selection.phase.value,
        "rates": snapshot.status.value if snapshot else "absent",
        "map_loaded": ctx.geography.loaded,
    }
