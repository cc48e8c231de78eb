from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from songlink.core.config import DEFAULT_JWT_SECRET
from songlink.core.database import init_database
from songlink.core.logging import setup_logging
from songlink.domain.catalog import CatalogResolver

from web.backend.deps import get_config


@asynccontextmanager
async def lifespan(app: FastAPI):
    config = get_config()
    setup_logging(config.logging)
    init_database(config.database.path)

    if config.auth.jwt_secret == DEFAULT_JWT_SECRET:
        logger.warning("JWT_SECRET is the built-in default; set it in production")

    configured = CatalogResolver(config.catalog).configured_providers()
    logger.info(f"Catalog providers configured: {', '.join(configured) or 'none'}")
    logger.info(f"Spectator URL: {config.server.spectator_url}")
    yield


app = FastAPI(title="SongLink API", version="1.0.0", lifespan=lifespan)

allowed_origins = get_config().server.allowed_origins

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials="*" not in allowed_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies are client errors like any other: 400."""
    return JSONResponse(
        status_code=400, content={"detail": jsonable_encoder(exc.errors())}
    )


# Include routers
from web.backend.routers import auth, live, send, spectator, user

app.include_router(auth.router, prefix="/api", tags=["auth"])
app.include_router(user.router, prefix="/api", tags=["user"])
app.include_router(send.router, prefix="/api", tags=["send"])
app.include_router(spectator.router, prefix="/api", tags=["spectator"])
app.include_router(live.router, tags=["live"])


@app.get("/health")
async def health_check():
    return {"status": "ok"}
