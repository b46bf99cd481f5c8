"""FastAPI application entrypoint for K-Point."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from . import __version__
from .api.v1.router import api_router
from .core.config import get_settings
from .core.database import Base, engine
from .jobs import register_scheduler
from .services.errors import InvalidRequest, LedgerInternalError

logger = logging.getLogger(__name__)


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    error = InvalidRequest("Request payload failed validation.")
    return JSONResponse(
        status_code=error.status_code,
        content={"detail": {**error.as_detail(), "errors": jsonable_encoder(exc.errors())}},
    )


async def _store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("store failure on %s %s", request.method, request.url.path)
    error = LedgerInternalError("The operation could not be completed; nothing was changed.")
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"detail": error.as_detail()})


def create_app() -> FastAPI:
    """Instantiate and configure the FastAPI application."""
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    app = FastAPI(title="K-Point API", version=__version__)
    app.include_router(api_router, prefix="/api/v1")
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(SQLAlchemyError, _store_error_handler)

    if settings.create_tables_on_startup:
        @app.on_event("startup")
        def create_tables() -> None:
            Base.metadata.create_all(bind=engine)

    register_scheduler(app)
    return app


app = create_app()
