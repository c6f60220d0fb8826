from fastapi import APIRouter

from services import clock_service

router = APIRouter(tags=["clock"])


@router.get("/clock")
async def get_clock():
    return {"utc": clock_service.tick()}
