"""TailorHub FastAPI application.

Web server that processes commands synchronously via HTTP. Each request is
wrapped in the tailoring domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV selects the config overlay from domain.toml:
#   - unset/"test" → in-memory database and event store
#   - "production" → SQL database
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tailoring.domain import tailoring
from tailoring.media import reset_cdn
from tailoring.utils.logging import bind_actor, clear_context

tailoring.init()

from tailoring.api import include_routers, register_error_handlers  # noqa: E402

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # Close the CDN client on shutdown
    reset_cdn()


app = FastAPI(
    lifespan=lifespan,
    title="TailorHub API",
    description="Tailoring marketplace: catalogue, carts, checkout and order lifecycle",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the Protean domain context for each request and tag its log lines with the caller."""
    bind_actor(request.headers.get("x-user-id"), request.headers.get("x-user-role"))
    try:
        with tailoring.domain_context():
            return await call_next(request)
    finally:
        clear_context()


include_routers(app)
register_error_handlers(app)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": tailoring.name})
