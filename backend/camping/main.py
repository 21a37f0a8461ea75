import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from camping.core.ai.router import router as ai_router
from camping.core.auth.router import router as auth_router
from camping.core.incidents.router import router as incidents_router
from camping.core.rbac.router import router as rbac_router
from camping.core.stats.router import router as stats_router
from camping.settings import Settings, get_settings
from camping.state import AppState, build_adapter


def create_app(settings: Settings | None = None, state: AppState | None = None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app_state = state or AppState(settings, await build_adapter(settings))
        await app_state.load()
        app.state.camping = app_state
        yield
        await app_state.close()

    app = FastAPI(
        title="Gestor Camping API",
        version="0.1.0",
        docs_url="/docs" if settings.APP_DEBUG else None,
        redoc_url="/redoc" if settings.APP_DEBUG else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.APP_DEBUG else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(auth_router)
    app.include_router(rbac_router)
    app.include_router(incidents_router)
    app.include_router(stats_router)
    app.include_router(ai_router)

    @app.get("/health")
    async def health(request: Request):
        return {"status": "ok", "warning": request.app.state.camping.load_warning}

    return app


app = create_app()
