# storefront/main.py
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from . import cart, shop
from .config import Settings, get_settings
from .database import Database
from .exceptions import StoreError, StorefrontException

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    database: Database = app.state.database
    try:
        await database.connect()
    except (SQLAlchemyError, OSError):
        # refuse to serve: every request would fail against an unreachable store
        logger.exception("Database connection failed")
        await database.dispose()
        raise
    yield
    await database.dispose()


def _describe_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "path", "query")]
        field = ".".join(loc)
        parts.append(f"{field}: {err.get('msg')}" if field else str(err.get("msg")))
    return "; ".join(parts) or "Invalid request"


async def storefront_exception_handler(request: Request, exc: StorefrontException) -> JSONResponse:
    if isinstance(exc, StoreError):
        # cause already logged with traceback where it was raised
        logger.error("%s %s failed: %r", request.method, request.url.path, exc)
    else:
        logger.info("%s %s rejected: %r", request.method, request.url.path, exc)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = _describe_validation_errors(exc)
    logger.info("%s %s invalid request: %s", request.method, request.url.path, message)
    return JSONResponse(status_code=400, content={"detail": message})


def create_app(database: Optional[Database] = None, settings: Optional[Settings] = None) -> FastAPI:
    configure_logging()
    if database is None:
        settings = settings or get_settings()
        database = Database(settings.url, **settings.engine_options())

    app = FastAPI(
        title="Storefront",
        description="Product catalog and shopping cart API",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.database = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StorefrontException, storefront_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    app.include_router(shop.router)
    app.include_router(cart.router)

    @app.get("/health")
    async def health():
        try:
            await app.state.database.ping()
        except (SQLAlchemyError, OSError) as exc:
            logger.exception("Health check failed")
            raise StoreError("checking database health") from exc
        return {"status": "ok"}

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run("storefront.main:app", host="0.0.0.0", port=5000)
