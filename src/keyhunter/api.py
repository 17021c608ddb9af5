# keyhunter/api.py
import logging
import os
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from keyhunter import __version__
from keyhunter.core.exceptions import KeyHunterConfigError, ScanError
from keyhunter.scanner import scan_directory, scan_url
from keyhunter.scanner.config import load_scanner_config

APP_NAME = "keyhunter-api"
MODE = os.getenv("KEYHUNTER_ENV", "development")
CONFIG_PATH = os.getenv("KEYHUNTER_CONFIG")

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = FastAPI(title=APP_NAME, version=__version__)


class ScanInput(BaseModel):
    directory: str = "."


class UrlScanInput(BaseModel):
    url: str | None = None


def _now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _error(title: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"error": title, "message": message, "timestamp": _now()},
    )


@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info("%s %s - %s", request.method, request.url.path, _now())
    return await call_next(request)


@app.exception_handler(Exception)
async def internal_error(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    message = str(exc) if MODE == "development" else "An unexpected error occurred"
    return JSONResponse(
        status_code=500,
        content={"error": "Internal Server Error", "message": message},
    )


@app.get("/")
def root():
    return {
        "status": "API is running",
        "endpoints": {
            "health": "/api/health",
            "scan": "/api/scan",
            "scanUrl": "/api/scan/url",
        },
        "mode": MODE,
        "version": __version__,
    }


@app.get("/api/health")
def health():
    return {"status": "healthy", "mode": MODE, "timestamp": _now()}


@app.post("/api/scan")
def scan(input: ScanInput):
    try:
        config = load_scanner_config(CONFIG_PATH, repo_root=input.directory)
        report = scan_directory(input.directory, config)
    except (ScanError, KeyHunterConfigError) as e:
        logger.warning("Directory scan failed: %s", e)
        return _error("Scan Failed", str(e))
    return report.to_dict()


@app.post("/api/scan/url")
def scan_page(input: UrlScanInput):
    try:
        config = load_scanner_config(CONFIG_PATH)
        report = scan_url(input.url, config)
    except (ScanError, KeyHunterConfigError) as e:
        logger.warning("URL scan failed: %s", e)
        return _error("URL Scan Failed", str(e))
    return report.to_dict()
