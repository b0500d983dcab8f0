import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from jobshop.api.catalog import (
    machines_router,
    materials_router,
    services_router,
    staff_router,
)
from jobshop.api.expenses import expenses_router, suppliers_router
from jobshop.api.orders import router as orders_router
from jobshop.api.reports import router as reports_router
from jobshop.core.config import LOG_FORMAT, LOG_LEVEL
from jobshop.errors import InvalidInputError, NotFoundError, StoreDataError

logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
logger = logging.getLogger(__name__)

GENERIC_ERROR = "Something went wrong. Please try again."

app = FastAPI(
    title="Job Shop Operations API",
    version="0.1.0",
)


@app.exception_handler(NotFoundError)
def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(InvalidInputError)
def invalid_input_handler(request: Request, exc: InvalidInputError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(StoreDataError)
@app.exception_handler(SQLAlchemyError)
def store_error_handler(request: Request, exc: Exception):
    # Nothing was committed; the caller can retry the same request.
    logger.error(
        "Store call failed on %s %s", request.method, request.url.path, exc_info=exc
    )
    return JSONResponse(status_code=500, content={"detail": GENERIC_ERROR})


@app.get("/health")
def health_check():
    return {"status": "ok"}


app.include_router(orders_router)
app.include_router(materials_router)
app.include_router(services_router)
app.include_router(machines_router)
app.include_router(staff_router)
app.include_router(expenses_router)
app.include_router(suppliers_router)
app.include_router(reports_router)
