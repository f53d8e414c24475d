"""
FastAPI server for the FindCare map feed.

Serves the GoodBarber Custom Map JSON feed from the geocoded provider
directory in Postgres. One connection pool is opened at startup and shared
by all requests.
"""

import logging
import os
import time
from contextlib import asynccontextmanager
from pathlib import Path
from typing import List, Optional

from fastapi import FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from findcare.config import Config
from findcare.db import ProviderPool, ProviderQueryError
from findcare.feed import error_response
from findcare.provider_query import ProviderQuery
from findcare.service import FeedService

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger("api")

# ---------------------------------------------------------------------------
# Global pool + service (opened once at startup)
# ---------------------------------------------------------------------------
pool: Optional[ProviderPool] = None
service: Optional[FeedService] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the connection pool on startup, drain it on shutdown."""
    global pool, service
    t0 = time.time()

    # Load .env if present
    env_path = Path(__file__).parent / ".env"
    if env_path.exists():
        for line in env_path.read_text().splitlines():
            line = line.strip()
            if line and not line.startswith("#") and "=" in line:
                key, val = line.split("=", 1)
                os.environ.setdefault(key.strip(), val.strip())

    config = Config.from_env()
    pool = ProviderPool(config)
    try:
        pool.open()
        service = FeedService(ProviderQuery(pool), config)
        logger.info(f"Feed service ready in {time.time() - t0:.1f}s")
    except ProviderQueryError as e:
        logger.error(f"Feed service unavailable: {e}")

    yield

    if pool:
        pool.close()
    logger.info("Shutdown complete.")


# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------
app = FastAPI(
    title="FindCare API",
    description="Custom Map JSON feed of healthcare facilities for GoodBarber.",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET"],
    allow_headers=["*"],
)

_SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Resource-Policy": "same-origin",
    "X-DNS-Prefetch-Control": "off",
}


@app.middleware("http")
async def security_headers(request: Request, call_next):
    response = await call_next(request)
    for name, value in _SECURITY_HEADERS.items():
        response.headers.setdefault(name, value)
    return response


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------
class HealthResponse(BaseModel):
    ok: bool


class FeedItemResponse(BaseModel):
    id: int
    title: str
    summary: str
    address: str
    latitude: str
    longitude: str
    type: str
    subtype: str
    pinIconUrl: str
    pinIconColor: str
    pinIconWidth: int
    pinIconHeight: int
    url: str
    thumbnail: str
    smallThumbnail: str
    largeThumbnail: str
    content: str


class MapFeedResponse(BaseModel):
    items: List[FeedItemResponse] = Field(default_factory=list)
    next_page: Optional[str] = None
    generated_in: str
    stat: str


class ErrorResponse(BaseModel):
    stat: str = "error"
    message: str


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------
@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}


@app.get(
    "/map_feed",
    response_model=MapFeedResponse,
    responses={500: {"model": ErrorResponse}},
)
def map_feed(
    q: Optional[str] = Query(None, description="Organization name contains"),
    category: Optional[str] = Query(None, description="Exact provider category"),
    location: Optional[str] = Query(None, description="ZIP, ZIP+4, 'City, ST' or 'City'"),
    limit: Optional[str] = Query(None, description="Row cap, default 20, clamped to 1-200"),
):
    """
    Custom Map feed of providers matching the filters.

    Runs in the threadpool: the provider query blocks on Postgres.
    """
    if not service:
        return JSONResponse(
            status_code=500,
            content=error_response("Provider directory is not available").to_dict(),
        )

    raw_query = {"q": q, "category": category, "location": location, "limit": limit}
    try:
        result = service.build_feed(raw_query)
    except Exception as e:
        logger.error(f"ERROR /map_feed: {e}")
        return JSONResponse(status_code=500, content=error_response(str(e)).to_dict())

    return JSONResponse(content=result.to_dict())


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("api:app", host="0.0.0.0", port=int(os.environ.get("PORT", "3000")))
