from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from priorityparcel.core.config import settings
from priorityparcel.core.logging import get_logger
from priorityparcel.db.fixtures import seed_demo_data
from priorityparcel.db.session import create_all, make_engine, make_sessionmaker
from priorityparcel.repositories.base import DuplicateRecordError, Storage
from priorityparcel.repositories.memory import MemStorage
from priorityparcel.repositories.sql import SqlStorage
from priorityparcel.routers import admin, auth, contact, dashboard, offerte, zendingen
from priorityparcel.schemas.common import PayloadValidationError, field_errors

logger = get_logger(__name__)


def build_storage():
    """Storage selected by STORAGE_BACKEND, plus the engine to manage (sql only)."""
    if settings.STORAGE_BACKEND == "sql":
        engine = make_engine(settings.DATABASE_URL)
        storage = SqlStorage(make_sessionmaker(engine), customer_satisfaction=settings.CUSTOMER_SATISFACTION)
        return storage, engine
    if settings.STORAGE_BACKEND != "memory":
        raise ValueError(f"Unknown STORAGE_BACKEND: {settings.STORAGE_BACKEND!r}")
    return MemStorage(customer_satisfaction=settings.CUSTOMER_SATISFACTION), None


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_error(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={"message": "Validation error", "errors": field_errors(exc.errors())},
        )

    @app.exception_handler(PayloadValidationError)
    async def payload_validation_error(request: Request, exc: PayloadValidationError):
        return JSONResponse(status_code=400, content={"message": "Validation error", "errors": exc.errors})

    @app.exception_handler(DuplicateRecordError)
    async def duplicate_record(request: Request, exc: DuplicateRecordError):
        return JSONResponse(status_code=409, content={"message": f"{exc.field} already exists"})

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"message": "Error processing your request"})


def create_app(storage: Storage | None = None, *, seed: bool | None = None) -> FastAPI:
    engine = None
    if storage is None:
        storage, engine = build_storage()
    if seed is None:
        seed = settings.SEED_DEMO_DATA

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if engine is not None:
            await create_all(engine)
        if seed and await seed_demo_data(app.state.storage):
            logger.info("Demo data loaded into %s", type(app.state.storage).__name__)
        yield
        if engine is not None:
            await engine.dispose()

    app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
    app.state.storage = storage
    register_exception_handlers(app)

    @app.get("/health")
    async def health():
        return {"ok": True}

    app.include_router(auth.router)
    app.include_router(contact.router)
    app.include_router(offerte.router)
    app.include_router(zendingen.router)
    app.include_router(dashboard.router)
    app.include_router(admin.router)
    return app


app = create_app()

# Entry point for local runs
if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
