from contextlib import asynccontextmanager
from typing import Optional
import logging
import random

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from shortlinks.api import health, links, redirect
from shortlinks.core.config import Settings, get_settings
from shortlinks.core.errors import ShortLinkError
from shortlinks.core.logging_config import configure_logging
from shortlinks.db.database import Database
from shortlinks.schemas.response import fail
from shortlinks.services.allocator import CodeAllocator
from shortlinks.services.shortener import LinkService

logger = logging.getLogger(__name__)


def build_link_service(settings: Settings, rng: Optional[random.Random] = None) -> LinkService:
    allocator = CodeAllocator(rng=rng, length=settings.SHORT_CODE_LENGTH)
    return LinkService(
        allocator,
        max_retries=settings.CODE_GENERATION_RETRIES,
        degrade_list_to_empty=settings.LIST_FAILURE_RETURNS_EMPTY,
    )


def create_app(settings: Optional[Settings] = None, rng: Optional[random.Random] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Application '{settings.PROJECT_NAME}' starting up.")
        database = Database(settings)
        database.create_all()
        database.verify_connection()

        app.state.settings = settings
        app.state.database = database
        app.state.link_service = build_link_service(settings, rng)
        yield

        logger.info("Shutting down gracefully...")
        database.dispose()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Shorten long URLs and redirect visitors, counting clicks",
        lifespan=lifespan,
    )

    # Registered before the catch-all redirect route so fixed paths win
    app.include_router(health.router)
    app.include_router(links.router)
    app.include_router(redirect.router)

    @app.exception_handler(ShortLinkError)
    async def short_link_error_handler(request: Request, exc: ShortLinkError):
        return JSONResponse(status_code=exc.status_code, content=fail(exc.message))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.info(f"Rejected request body on {request.url.path}: {exc.errors()}")
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=fail("Invalid request body"))

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error(f"Database error on {request.url.path}: {exc}", exc_info=True)
        return JSONResponse(status_code=500, content=fail("Internal server error"))

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(status_code=500, content=fail("Internal server error"))

    return app


app = create_app()


def run():
    import uvicorn

    uvicorn.run("shortlinks.main:app", host="0.0.0.0", port=8080)


if __name__ == "__main__":
    run()
