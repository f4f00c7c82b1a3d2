"""Your Next Step - FastAPI app entry point."""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from nextstep.core.config import Settings, get_settings
from nextstep.core.errors import register_exception_handlers
from nextstep.core.logging import setup_logging
from nextstep.core.security import configure_hashing
from nextstep.db.base import Base
from nextstep.db.session import create_engine_for, create_session_lock, create_sessionmaker, open_session
from nextstep.routers import auth, coach, community, learning, users
from nextstep.services.ai import AIGateway
from nextstep.services.seeding import seed_reference_data


def create_app(settings: Settings | None = None, ai_gateway: AIGateway | None = None) -> FastAPI:
    """Build an app owning its own store engine, session factory and AI gateway."""
    settings = settings or get_settings()
    logger = setup_logging(settings.log_level)
    configure_hashing(settings.bcrypt_rounds)

    engine = create_engine_for(settings.database_url, echo=settings.debug)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        async with open_session(app.state) as db:
            await seed_reference_data(db)

        logger.info("%s started (%s)", settings.app_name, settings.environment)
        yield
        await engine.dispose()

    app = FastAPI(
        title=settings.app_name,
        description="Career guidance for high school students",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.sessionmaker = create_sessionmaker(engine)
    app.state.db_lock = create_session_lock(settings.database_url)
    app.state.ai_gateway = ai_gateway or AIGateway.from_settings(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "Origin", "X-Requested-With"],
    )

    register_exception_handlers(app, settings.auth_cookie_name)

    app.include_router(auth.router)
    app.include_router(learning.router)
    app.include_router(coach.router)
    app.include_router(community.router)
    app.include_router(users.router)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)
