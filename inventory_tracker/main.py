# inventory_tracker/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm.exc import StaleDataError

from inventory_tracker.config import settings
from inventory_tracker.database import SessionLocal, init_db
from inventory_tracker.exceptions import (
    ConcurrencyConflictError,
    InsufficientStockError,
    NotFoundError,
    ValidationError,
)
from inventory_tracker.logging_setup import setup_logging
from inventory_tracker.utils.seed import ensure_default_admin

# Import routerów
from inventory_tracker.routes.auth import router as auth_router
from inventory_tracker.routes.logs import router as logs_router
from inventory_tracker.routes.products import router as products_router
from inventory_tracker.routes.categories import router as categories_router
from inventory_tracker.routes.suppliers import router as suppliers_router
from inventory_tracker.routes.reasons import router as reasons_router
from inventory_tracker.routes.stats import router as stats_router
from inventory_tracker.routes.locations import router as locations_router
from inventory_tracker.routes.stock import router as stock_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Inicjalizacja
    setup_logging(settings)
    init_db()
    if settings.SEED_DEFAULT_ADMIN:
        db = SessionLocal()
        try:
            ensure_default_admin(db)
        finally:
            db.close()
    logger.info("Inventory Tracker API started")
    yield


app = FastAPI(title="Inventory Tracker API", version="1.0.0", lifespan=lifespan)

# CORS Configuration
origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173"
]

if settings.FRONTEND_URL:
    origins.append(settings.FRONTEND_URL)

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ===== Domain errors -> HTTP =====

@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(
        status_code=422,
        content={"detail": str(exc), "code": exc.code, "errors": exc.errors},
    )


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc), "code": exc.code})


@app.exception_handler(InsufficientStockError)
async def insufficient_stock_handler(request: Request, exc: InsufficientStockError):
    return JSONResponse(
        status_code=400,
        content={"detail": str(exc), "code": exc.code, "errors": {"quantity": [str(exc)]}},
    )


@app.exception_handler(ConcurrencyConflictError)
async def concurrency_conflict_handler(request: Request, exc: ConcurrencyConflictError):
    logger.warning(f"{request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=409, content={"detail": str(exc), "code": exc.code})


# Catalog edits use the same version counter on products, without retrying
@app.exception_handler(StaleDataError)
async def stale_data_handler(request: Request, exc: StaleDataError):
    logger.warning(f"{request.method} {request.url.path}: stale write ({exc})")
    return JSONResponse(
        status_code=409,
        content={
            "detail": "The record was changed by someone else. Reload and try again.",
            "code": ConcurrencyConflictError.code,
        },
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"detail": "An unexpected error occurred."})


# Rejestracja routerów
app.include_router(auth_router)
app.include_router(logs_router)
app.include_router(products_router)
app.include_router(categories_router)
app.include_router(suppliers_router)
app.include_router(reasons_router)
app.include_router(stats_router)
app.include_router(locations_router)

# Rejestracja Stock
app.include_router(stock_router, prefix="/stock")


@app.get("/")
def read_root():
    return {"message": "Inventory Tracker API is running"}
