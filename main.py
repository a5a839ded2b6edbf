import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pagecms.config import settings
from pagecms.database import Base, engine
from pagecms.exception_handlers import register_exception_handlers
from pagecms.routes.pages import public_routers, routers
from pagecms.services.notification_service import get_approval_notifier

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Create the FastAPI application."""
    app = FastAPI(
        title=settings.app_name,
        description="Versioned landing, partner and FAQ pages",
        debug=settings.debug,
        version=settings.app_version,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    for router in routers:
        app.include_router(router, prefix="/api/v1")
    for router in public_routers:
        app.include_router(router, prefix="/api/v1")

    if settings.debug:
        logger.info(f"Running in {settings.environment} mode")
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)

    @app.on_event("startup")
    async def startup_event():
        logger.info("Starting up the application...")
        if settings.debug:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            logger.info("Database tables created (if not existing).")

    @app.on_event("shutdown")
    async def shutdown_event():
        logger.info("Shutting down the application...")
        await get_approval_notifier().drain()

    @app.get("/", tags=["Root"])
    async def root():
        return {"message": f"Welcome to the {settings.app_name} API"}

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=settings.debug)
