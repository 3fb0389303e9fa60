"""FastAPI application entry point.

Usage:
    python src/api/main.py              # export contract, then serve
    python src/api/main.py gen:openapi  # export contract and exit
"""

import os
import sys
import argparse
import logging
import tomllib
from importlib import metadata
from pathlib import Path
from fastapi import FastAPI, Request, status
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Add src to path
# main.py is at <root>/src/api/main.py, so src is 2 levels up
_src_path = Path(__file__).parent.parent
sys.path.insert(0, str(_src_path))

from api.contract import export_contract, get_openapi_path
from api.models import ErrorResponse
from api.routes import health, users
from domain.model.errors import ContractExportError
from utils.logging import setup_structured_logging

# Set up structured JSON logging
setup_structured_logging()

logger = logging.getLogger(__name__)

DIST_NAME = "monorepo-api"

_project_root = _src_path.parent


def read_version() -> str:
    """Installed distribution version, or pyproject.toml when running from a checkout."""
    try:
        return metadata.version(DIST_NAME)
    except metadata.PackageNotFoundError:
        with open(_project_root / "pyproject.toml", "rb") as f:
            return tomllib.load(f)["project"]["version"]


VERSION = read_version()

SERVICE_NAME = "Monorepo API"

DEFAULT_PORT = 8080
DEV_ORIGINS = ["http://localhost:5173", "http://localhost:5175"]

# Connection-level timeouts (seconds)
KEEP_ALIVE_TIMEOUT = 60
GRACEFUL_SHUTDOWN_TIMEOUT = 10

MODE_SERVE = "serve"
MODE_GEN_OPENAPI = "gen:openapi"


def resolve_cors_origins(env_origin: str | None) -> list[str]:
    """Local dev origins plus env_origin when it is set and not already listed."""
    origins = list(DEV_ORIGINS)
    if env_origin and env_origin not in origins:
        origins.append(env_origin)
    return origins


app = FastAPI(
    title=SERVICE_NAME,
    description="CRUD API over an in-memory collection of users",
    version=VERSION,
)

cors_origins = resolve_cors_origins(os.getenv("CORS_ORIGIN"))
logger.info(f"CORS configured with origins: {cors_origins}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Accept", "Authorization", "Content-Type", "X-CSRF-Token"],
    expose_headers=["Link"],
    max_age=300,
)


def _invalid_request(request: Request, reason: str) -> JSONResponse:
    logger.info("Rejected invalid request", extra={
        "method": request.method,
        "path": request.url.path,
        "reason": reason,
    })
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ErrorResponse(error="Invalid request").model_dump(),
    )


@app.exception_handler(RequestValidationError)
async def invalid_request_handler(request: Request, exc: RequestValidationError):
    """Map unparseable or ill-typed request bodies to 400."""
    return _invalid_request(request, f"{len(exc.errors())} validation error(s)")


@app.exception_handler(StarletteHTTPException)
async def bad_request_handler(request: Request, exc: StarletteHTTPException):
    """Give 400s raised while reading the body (e.g. non-UTF-8 bytes) the same error body."""
    if exc.status_code == status.HTTP_400_BAD_REQUEST:
        return _invalid_request(request, str(exc.detail))
    return await http_exception_handler(request, exc)


# Register routes
app.include_router(health.router)
app.include_router(users.router)


def get_port() -> int:
    return int(os.getenv("API_PORT") or DEFAULT_PORT)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=f"{SERVICE_NAME} server")
    parser.add_argument(
        "mode",
        nargs="?",
        default=MODE_SERVE,
        choices=[MODE_SERVE, MODE_GEN_OPENAPI],
        help="'serve' exports the contract then starts the server; "
             "'gen:openapi' only exports the contract",
    )
    return parser.parse_args(argv)


def serve(port: int) -> None:
    """Run the HTTP server until SIGINT/SIGTERM."""
    config = uvicorn.Config(
        app,
        host="0.0.0.0",
        port=port,
        timeout_keep_alive=KEEP_ALIVE_TIMEOUT,
        timeout_graceful_shutdown=GRACEFUL_SHUTDOWN_TIMEOUT,
        access_log=False,
        log_config=None,  # keep structured logging
    )
    server = uvicorn.Server(config)
    logger.info(f"Server running on http://0.0.0.0:{port}")
    server.run()
    logger.info("Server stopped")


def main(argv: list[str] | None = None) -> None:
    """Export the contract, then serve unless running in export-only mode."""
    args = parse_args(argv)

    try:
        export_contract(app, get_openapi_path())
    except ContractExportError as e:
        logger.error(str(e), extra={"path": e.path})
        sys.exit(1)

    if args.mode == MODE_GEN_OPENAPI:
        return

    try:
        serve(get_port())
    except KeyboardInterrupt:
        logger.info("Server stopped")
    except Exception as e:
        logger.error(f"Server failed: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
