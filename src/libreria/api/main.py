from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from libreria.api.gate import edge_gate
from libreria.api.routes import auth_router, books_router, favorites_router, reviews_router, search_router
from libreria.core.config import settings
from libreria.core.errors import LibreriaError
from libreria.db.session import init_db


logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


app = FastAPI(title="Libreria", lifespan=lifespan)

# The gate runs inside CORS so preflight requests are answered first.
app.add_middleware(BaseHTTPMiddleware, dispatch=edge_gate)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(LibreriaError)
async def handle_libreria_error(request: Request, exc: LibreriaError) -> JSONResponse:
    return JSONResponse({"message": exc.message}, status_code=exc.status_code)


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse({"message": "Invalid request"}, status_code=400)


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse({"message": "Internal server error"}, status_code=500)


app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
app.include_router(search_router, prefix="/api/search", tags=["search"])
app.include_router(books_router, prefix="/api/books", tags=["books"])
app.include_router(reviews_router, prefix="/api/reviews", tags=["reviews"])
app.include_router(favorites_router, prefix="/api/favorites", tags=["favorites"])


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}
