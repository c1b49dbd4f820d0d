"""Same-origin server: static front-end, manifests, and a JSON fetch proxy."""

from pathlib import Path
from typing import Any

import requests
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from loguru import logger

from nft_gallery.config import (
    DEFAULT_HOST,
    REQUEST_TIMEOUT,
    resolve_manifest_paths,
    resolve_port,
    resolve_static_dir,
)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def create_app(
    *,
    static_dir: Path | None = None,
    images_csv: Path | None = None,
    metadata_csv: Path | None = None,
) -> FastAPI:
    """Build the server app. Unset paths fall back to the environment/config defaults."""
    static_root = static_dir or resolve_static_dir()
    default_images, default_metadata = resolve_manifest_paths(static_root)
    images_path = images_csv or default_images
    metadata_path = metadata_csv or default_metadata

    app = FastAPI(title="nft-gallery")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    @app.get("/api/images")
    def images() -> Any:
        """Images manifest as `{"data": <csv text>}`."""
        try:
            return {"data": images_path.read_text(encoding="utf-8")}
        except (OSError, UnicodeDecodeError):
            logger.exception("Error reading images CSV {}", images_path)
            return _error(500, "Failed to read images data")

    @app.get("/api/metadata")
    def metadata() -> Any:
        """Metadata manifest as `{"data": <csv text>}`."""
        try:
            return {"data": metadata_path.read_text(encoding="utf-8")}
        except (OSError, UnicodeDecodeError):
            logger.exception("Error reading metadata CSV {}", metadata_path)
            return _error(500, "Failed to read metadata data")

    # Open pass-through: there is no allowlist of target origins.
    @app.get("/api/proxy")
    def proxy(url: str | None = None) -> Any:
        """Fetch `url` and return its JSON body verbatim."""
        if not url:
            return _error(400, "URL parameter is required")
        try:
            r = requests.get(url, timeout=REQUEST_TIMEOUT)
            data = r.json()
        except (requests.RequestException, ValueError):
            logger.exception("Proxy error for {!r}", url)
            return _error(500, "Failed to fetch data")
        return JSONResponse(content=data)

    if static_root.is_dir():
        app.mount("/", StaticFiles(directory=static_root, html=True), name="static")
    else:
        logger.warning("Static directory not found, not serving files: {}", static_root)

    logger.debug(
        "Server configured: static {}, images {}, metadata {}",
        static_root,
        images_path,
        metadata_path,
    )
    return app


def run_server(
    *,
    host: str = DEFAULT_HOST,
    port: int | None = None,
    static_dir: Path | None = None,
) -> None:
    """Run the server with uvicorn."""
    listen_port = port or resolve_port()
    app = create_app(static_dir=static_dir)
    logger.info("Gallery server running at http://{}:{}", host, listen_port)
    uvicorn.run(app, host=host, port=listen_port, log_level="info")
