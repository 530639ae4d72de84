import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from userstore.core.errors import StoreConnectionError
from userstore.db.session import engine, init_db

logger = logging.getLogger(__name__)


def register_startup(app: FastAPI) -> None:
    @app.on_event("startup")
    def _create_tables() -> None:
        init_db(engine)
        logger.info("Database tables ready")


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(StoreConnectionError)
    async def _store_unavailable(request: Request, exc: StoreConnectionError) -> JSONResponse:
        logger.error("Store unavailable on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content={"detail": exc.kind})
