# techstore/main.py
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import logging
from contextlib import asynccontextmanager

from techstore.config import settings
from techstore.database import db, TABLES
from techstore.api.routes import products as product_routes
from techstore.core.errors import CriteriaValidationError, QueryCancelled
from techstore.middleware.cors_config import configure_cors


logger = logging.getLogger("uvicorn.error")


def configure_logging() -> None:
    logging.getLogger("techstore").setLevel(settings.LOG_LEVEL.upper())


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context: run startup checks before the app starts serving,
    and allow for clean shutdown actions if needed later.
    """
    configure_logging()
    # Check the catalog tables. Missing files read as empty tables, so only warn.
    for table in TABLES:
        path = db._file_path(table)
        if not path.exists():
            logger.warning("Table %s not found at %s; run scripts/init_db.py to seed it.", table, path)
        else:
            logger.info("Found %s table: %s", table, path)

    yield
    logger.info("Shutting down Tech Store Catalog API")

app = FastAPI(title="Tech Store Catalog API", version="0.1.0", lifespan=lifespan)
configure_cors(app)


@app.exception_handler(CriteriaValidationError)
async def criteria_validation_handler(request: Request, exc: CriteriaValidationError):
    return JSONResponse(status_code=422, content={"detail": str(exc), "field": exc.field})


@app.exception_handler(QueryCancelled)
async def query_cancelled_handler(request: Request, exc: QueryCancelled):
    return JSONResponse(status_code=503, content={"detail": str(exc)})


app.include_router(product_routes.router)


@app.get("/", tags=["root"])
async def root():
    return {"status": "ok", "service": "Tech Store Catalog API"}
