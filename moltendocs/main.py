"""FastAPI application entrypoint. No business logic; only wiring and middleware."""

from dotenv import load_dotenv

load_dotenv()

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from moltendocs.api import router as api_router
from moltendocs.api.errors import register_exception_handlers
from moltendocs.core.config import settings
from moltendocs.services.credential_store import get_credential_store
from moltendocs.services.session_sweep import run_session_sweep


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Initialize the credential store (schema + admin bootstrap) and purge expired sessions."""
    store = get_credential_store()
    run_session_sweep(store, settings)
    yield


app = FastAPI(
    title="MoltenDocs API",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.APP_ENV == "dev" else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)
app.include_router(api_router, prefix=settings.API_PREFIX)


@app.get("/")
def root() -> dict[str, str]:
    """Root route; minimal payload for discovery."""
    return {"message": "MoltenDocs API"}
