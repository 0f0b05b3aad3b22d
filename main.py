# main.py
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.routers import (
    product_router,
    category_router,
    supplier_router,
    stats_router,
)

from app.core.config import (
    APP_ENV,
    APP_NAME,
    APP_VERSION,
    CORS_ORIGINS,
    DATABASE_URL,
    PORT,
)
from app.core.db import Database, get_db, init_models
from app.core.exceptions import AppException, DatabaseError
from app.core.logging import setup_logging
from app.middleware.request_logging import request_logging_middleware
from app.core.error_handlers import (
    app_exception_handler,
    validation_exception_handler,
    http_exception_handler,
    database_error_handler,
    unhandled_exception_handler,
)

API_PREFIX = "/api"

# ------------------------------------------------------------------------------
# LOGGING
# ------------------------------------------------------------------------------
setup_logging()
logger = logging.getLogger(__name__)


# ------------------------------------------------------------------------------
# LIFESPAN
# ------------------------------------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting application")

    db = Database.from_url(app.state.database_url)
    app.state.db = db

    # startup check only reports, it never blocks boot
    try:
        await db.ping()
        logger.info("Database check OK")
    except DatabaseError as exc:
        logger.error("Database check failed: %s", exc.message)
    else:
        if APP_ENV == "development":
            try:
                await init_models(db)
                logger.info("Database models initialized (development)")
            except SQLAlchemyError:
                logger.exception("init_models() failed")
        else:
            logger.info("%s mode: init_models() skipped", APP_ENV)

    yield

    logger.info("Shutting down application")
    await db.dispose()


# ------------------------------------------------------------------------------
# APP INIT
# ------------------------------------------------------------------------------
def create_app(database_url=DATABASE_URL) -> FastAPI:
    app = FastAPI(
        title=APP_NAME,
        description="REST backend for products, categories, suppliers and stock movements",
        version=APP_VERSION,
        docs_url="/docs" if APP_ENV != "production" else None,
        redoc_url=None,
        lifespan=lifespan,
    )
    app.state.database_url = database_url

    # --------------------------------------------------------------------------
    # EXCEPTION HANDLERS
    # --------------------------------------------------------------------------
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(DatabaseError, database_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # --------------------------------------------------------------------------
    # MIDDLEWARE
    # --------------------------------------------------------------------------
    app.middleware("http")(request_logging_middleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials="*" not in CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # --------------------------------------------------------------------------
    # HEALTH CHECK
    # --------------------------------------------------------------------------
    @app.get(f"{API_PREFIX}/health", tags=["Health"])
    async def health_check(db: Database = Depends(get_db)):
        try:
            await db.ping()
        except DatabaseError as exc:
            logger.error("Health check failed: %s", exc.message)
            return JSONResponse(
                status_code=500,
                content={"status": "error", "database": "disconnected"},
            )
        return {"status": "ok", "database": "connected"}

    # --------------------------------------------------------------------------
    # ROUTERS
    # --------------------------------------------------------------------------
    app.include_router(product_router, prefix=API_PREFIX)
    app.include_router(category_router, prefix=API_PREFIX)
    app.include_router(supplier_router, prefix=API_PREFIX)
    app.include_router(stats_router, prefix=API_PREFIX)

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=PORT)
