import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from config import settings as default_settings
from routers import clock, countries, health, maps, rates, selection
from services.context import AppContext

logger = logging.getLogger(__name__)


def create_app(context: AppContext | None = None) -> FastAPI:
    """Build the API around an AppContext (tests pass one with fake providers)."""
    ctx = context or AppContext(default_settings)
    settings = ctx.settings

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    app = FastAPI(title=settings.app_name, version=settings.version)
    app.state.context = ctx
    app.state.limiter = Limiter(key_func=get_remote_address)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(countries.router)
    app.include_router(rates.router)
    app.include_router(maps.router)
    app.include_router(selection.router)
    app.include_router(clock.router)

    @app.get("/")
    async def root():
        return {
            "name": f"{settings.app_name} API",
            "version": settings.version,
            "endpoints": ["/health", "/countries", "/rates", "/map/features", "/map/render", "/selection", "/clock"],
        }

    @app.on_event("startup")
    async def startup():
        await ctx.startup()
        logger.info("%s API is running (phase=%s)", settings.app_name, ctx.selection.phase.value)

    @app.on_event("shutdown")
    async def shutdown():
        await ctx.shutdown()

    return app


app = create_app()
