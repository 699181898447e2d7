"""Health check endpoint with database and content directory checks."""

from typing import Annotated

from fastapi import APIRouter, Depends

from moltendocs.core.config import settings
from moltendocs.schemas.health import HealthResponse
from moltendocs.services.credential_store import CredentialStore, get_credential_store
from moltendocs.services.documents import DocumentRepository, get_document_repository

router = APIRouter()


@router.get("", response_model=HealthResponse)
def get_health(
    store: Annotated[CredentialStore, Depends(get_credential_store)],
    repository: Annotated[DocumentRepository, Depends(get_document_repository)],
) -> HealthResponse:
    """
    Return service health status, database connectivity and whether the
    content root exists. Used by load balancers and monitoring.
    """
    return HealthResponse(
        status="ok",
        environment=settings.APP_ENV,
        database="connected" if store.ping() else "disconnected",
        content="present" if repository.content_dir.is_dir() else "missing",
    )
