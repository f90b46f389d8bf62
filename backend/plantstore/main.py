import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from plantstore.api.health import router as health_router
from plantstore.api.responses import failure
from plantstore.api.routes_cart import router as cart_router
from plantstore.api.routes_catalogue import router as catalogue_router
from plantstore.api.routes_wishlist import router as wishlist_router
from plantstore.config import settings
from plantstore.db import init_db, store
from plantstore.errors import Internal, InvalidArgument, NotFound, StoreError

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
log = logging.getLogger("plantstore")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup
    store.connect()
    init_db(reset=settings.RESET_DB)
    log.info("Plant Store API starting (environment=%s)", settings.ENVIRONMENT)
    try:
        yield
    finally:
        store.disconnect()


app = FastAPI(title="Plant Store - Backend", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.FRONTEND_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _json(status_code: int, body: dict) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    if exc.status_code >= 500:
        log.warning("%s %s failed: %s", request.method, request.url.path, exc.message)
    return _json(exc.status_code, failure(exc.message, exc.kind, exc.data))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    first = exc.errors()[0] if exc.errors() else {}
    where = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    message = f"Invalid {where}: {first.get('msg')}" if where else "Invalid request"
    return _json(400, failure(message, InvalidArgument.kind))


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        message = f"Route {request.url.path} not found"
        return _json(404, failure(message, NotFound.kind))
    return _json(exc.status_code, failure(str(exc.detail), InvalidArgument.kind if exc.status_code < 500 else Internal.kind))


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    log.exception("unhandled error on %s %s", request.method, request.url.path)
    body = failure("Something went wrong!", Internal.kind)
    if settings.is_development:
        body["detail"] = f"{type(exc).__name__}: {exc}"
    return _json(500, body)


app.include_router(health_router, prefix="/api", tags=["health"])

app.include_router(catalogue_router)

app.include_router(cart_router)

app.include_router(wishlist_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("plantstore.main:app", host=settings.APP_HOST, port=settings.APP_PORT)
