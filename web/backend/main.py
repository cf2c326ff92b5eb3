"""
Tunebox web server.

Builds the FastAPI application over a metadata store and a file store, and
provides the `tunebox-server` entry point.
"""

import argparse
import sys
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from tunebox import __version__
from tunebox.core.config import (
    Config,
    ConfigError,
    create_default_config,
    get_config_dir,
    load_config,
)
from tunebox.core.output import setup_logging_from_config
from tunebox.domain.library import FileStore, JsonLibraryStore, LibraryStore

from web.backend.routers import health, media, music


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        {"error": exc.detail},
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg')}"
        for err in exc.errors()
    )
    logger.warning(f"Invalid request to {request.url.path}: {errors}")
    return JSONResponse({"error": f"Invalid request: {errors}"}, status_code=400)


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.opt(exception=exc).error(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse({"error": "Internal server error"}, status_code=500)


def create_app(
    config: Optional[Config] = None,
    store: Optional[LibraryStore] = None,
    file_store: Optional[FileStore] = None,
) -> FastAPI:
    """Build the application, creating storage on first run."""
    config = config or load_config()
    store = store or JsonLibraryStore(config.storage.library_path)
    file_store = file_store or FileStore(config.storage.media_path)

    file_store.initialize()
    store.initialize()

    app = FastAPI(title="Tunebox", version=__version__)
    app.state.config = config
    app.state.store = store
    app.state.file_store = file_store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000
        logger.info(
            f"{request.method} {request.url.path} | {response.status_code} | {duration_ms:.0f}ms"
        )
        return response

    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # Include routers
    app.include_router(music.router, prefix="/api", tags=["music"])
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(media.router, tags=["media"])

    # Front-end last so API routes win
    public_dir = config.storage.public_path
    if public_dir.is_dir():
        app.mount("/", StaticFiles(directory=public_dir, html=True), name="public")
    else:
        logger.warning(f"Public directory not found, front-end disabled: {public_dir}")

    return app


def write_default_config() -> Path:
    """Write the default config.toml to the config directory if absent."""
    config_path = get_config_dir() / "config.toml"
    if not config_path.exists():
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(create_default_config() + "\n", encoding="utf-8")
    return config_path


def main() -> None:
    """Main entry point for the tunebox-server command."""
    parser = argparse.ArgumentParser(description="Tunebox - minimal music library server")
    parser.add_argument("--config", type=Path, help="Path to config.toml")
    parser.add_argument("--host", help="Interface to bind (overrides config)")
    parser.add_argument("--port", type=int, help="Port to listen on (overrides config and PORT)")
    parser.add_argument(
        "--init-config",
        action="store_true",
        help="Write a default config.toml to the config directory and exit",
    )
    args = parser.parse_args()

    if args.init_config:
        print(f"Configuration at: {write_default_config()}")
        return

    try:
        config = load_config(args.config)
        if args.host:
            config.server.host = args.host
        if args.port is not None:
            config.server.port = args.port
            config.server.validate()
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)

    setup_logging_from_config(config.logging)

    import uvicorn

    app = create_app(config)
    logger.info(
        f"Tunebox server started at {datetime.now(timezone.utc).isoformat()} | "
        f"port {config.server.port} | data directory {config.storage.data_path} | "
        f"http://localhost:{config.server.port}"
    )
    uvicorn.run(app, host=config.server.host, port=config.server.port)


if __name__ == "__main__":
    main()
