import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from pizzahub.api import health, users
from pizzahub.api.routes.auth import router as auth_router
from pizzahub.api.routes.catalog import router as catalog_router
from pizzahub.api.routes.orders import router as orders_router
from pizzahub.api.routes.stats import router as stats_router
from pizzahub.config import setup_logging
from pizzahub.core.errors import StorefrontError
from pizzahub.db.init_db import init_db
from pizzahub.db.session import engine

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    await init_db()
    logger.info("🍕 PizzaHub started")
    yield
    await engine.dispose()
    logger.info("🛑 PizzaHub stopped")


app = FastAPI(title="PizzaHub", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StorefrontError)
async def storefront_error_handler(request: Request, exc: StorefrontError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{field}: {first.get('msg')}" if field else first.get("msg")
    else:
        message = "Invalid request"
    return JSONResponse(status_code=400, content={"error": message})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled exception on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


# Подключаем роуты
app.include_router(health.router)
app.include_router(auth_router)
app.include_router(catalog_router)
app.include_router(orders_router)
app.include_router(users.router)
app.include_router(stats_router)
