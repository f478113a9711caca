import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from pagewise.config import LOG_LEVEL
from pagewise.errors import PagewiseError
from pagewise.routers import books, plans, progress, reports

logger = logging.getLogger(__name__)


async def _pagewise_error(request: Request, exc: PagewiseError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    content = {"detail": exc.message}
    if exc.retryable:
        content["retryable"] = True
    return JSONResponse(status_code=exc.status_code, content=content)


async def _database_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Database error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Error interno de base de datos"})


def create_app() -> FastAPI:
    logging.getLogger("pagewise").setLevel(LOG_LEVEL)

    app = FastAPI(title="Pagewise", version="0.1.0")
    app.add_exception_handler(PagewiseError, _pagewise_error)
    app.add_exception_handler(SQLAlchemyError, _database_error)
    app.include_router(books.router)
    app.include_router(plans.router)
    app.include_router(progress.router)
    app.include_router(reports.router)
    return app


app = create_app()
