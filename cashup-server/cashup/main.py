from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cashup import __version__
from cashup.api import create_api_router
from cashup.core.config import get_settings
from cashup.core.container import get_container
from cashup.core.logging import setup_logging
from cashup.infrastructure.database.session import init_db
from cashup.schemas import HealthResponse

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings)
    app.state.container = get_container()
    if settings.database.auto_create:
        await init_db()
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.project_name,
        description="Nightly cash-up and reconciliation for the shop's cash and wallets",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(create_api_router(settings.api_prefix))

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(version=__version__)

    return app


app = create_app()


def run() -> None:
    import uvicorn

    uvicorn.run(
        "cashup.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.server.reload,
        log_config=None,
    )


if __name__ == "__main__":
    run()
