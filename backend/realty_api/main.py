# backend/realty_api/main.py
from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.orm import Session

from realty_api.core.errors import RealtyApiError
from realty_api.core.logging import setup_logging
from realty_api.core.settings import get_settings
from realty_api.db import close_db, get_db, get_engine, import_all_models

from realty_api.routers.realty import router as realty_router      # /api/Realty
from realty_api.routers.realtors import router as realtors_router  # /api/Realtor
from realty_api.routers.sales import router as sales_router        # /api/Sale

LOGGER = logging.getLogger(__name__)

settings = get_settings()
setup_logging(settings.LOG_LEVEL)


@asynccontextmanager
async def lifespan(app: FastAPI):
    import_all_models()
    yield
    # only dispose a pool that was actually created
    if get_engine.cache_info().currsize:
        close_db()


app = FastAPI(
    title="Realty API",
    lifespan=lifespan,
)

# ───── CORS ─────
app.add_middleware(
   CORSMiddleware,
   allow_origins=(["*"] if settings.API_ALLOW_ALL else settings.allowed_origins),
   allow_origin_regex=(".*" if settings.API_ALLOW_ALL else None),
   allow_methods=["*"],
   allow_headers=["*"],
   allow_credentials=False,
)

# ───── Errors ─────
@app.exception_handler(RealtyApiError)
async def realty_error_handler(request: Request, exc: RealtyApiError):
    return JSONResponse(status_code=exc.status_code, content={"detail": str(exc)})

@app.exception_handler(OperationalError)
@app.exception_handler(InterfaceError)
async def store_unavailable_handler(request: Request, exc: Exception):
    # CRUD paths hit the session directly; reports already raise StoreUnavailableError
    LOGGER.warning("database unavailable on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": "data store is unavailable"})

# ───── Health ─────
@app.get("/health")
async def health():
    return {"ok": True}

@app.get("/health/db")
def health_db(db: Session = Depends(get_db)):
    try:
        db.execute(text("SELECT 1"))
        return {"db": True}
    except (OperationalError, InterfaceError):
        LOGGER.warning("database health check failed", exc_info=True)
        return {"db": False}

# ───── Routers ─────
app.include_router(realty_router)    # /api/Realty (+ reports)
app.include_router(realtors_router)  # /api/Realtor
app.include_router(sales_router)     # /api/Sale


@app.middleware("http")
async def log_timing(request, call_next):
    t0 = time.perf_counter()
    resp = await call_next(request)
    dt = (time.perf_counter() - t0) * 1000
    LOGGER.info("[%s] %s?%s -> %s %.1fms", request.method, request.url.path, request.query_params, resp.status_code, dt)
    return resp


def run() -> None:
    import uvicorn

    uvicorn.run("realty_api.main:app", host=settings.API_HOST, port=settings.API_PORT)


if __name__ == "__main__":
    run()
