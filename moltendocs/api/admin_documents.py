"""Admin document endpoints: create, read, update and delete markdown files."""

from typing import Annotated

from fastapi import APIRouter, Depends

from moltendocs.core.errors import InvalidArgumentError
from moltendocs.schemas.auth import SuccessResponse
from moltendocs.schemas.documents import (
    CreateDocumentRequest,
    CreatedDocumentResponse,
    DocumentContent,
    UpdateDocumentRequest,
)
from moltendocs.services.documents import DocumentRepository, get_document_repository

router = APIRouter()


@router.post("", response_model=CreatedDocumentResponse, status_code=201)
def create_document(
    body: CreateDocumentRequest,
    repository: Annotated[DocumentRepository, Depends(get_document_repository)],
) -> CreatedDocumentResponse:
    """
    Create a new document with `title` (plus any extra frontmatter) and content.

    Returns 409 if a document already exists at the slug.
    """
    if not body.slug or not body.title:
        raise InvalidArgumentError("Slug and title are required")
    path = repository.create(body.slug, body.title, body.content, body.frontmatter)
    return CreatedDocumentResponse(path=path, slug=body.slug)


@router.get("/{slug:path}", response_model=DocumentContent)
def get_document(
    slug: str,
    repository: Annotated[DocumentRepository, Depends(get_document_repository)],
) -> DocumentContent:
    return repository.read(slug)


@router.put("/{slug:path}", response_model=SuccessResponse)
def update_document(
    slug: str,
    body: UpdateDocumentRequest,
    repository: Annotated[DocumentRepository, Depends(get_document_repository)],
) -> SuccessResponse:
    """
    Overwrite frontmatter and content.

    Writes the file whether or not it existed, so this also creates documents
    without the conflict check of POST.
    """
    repository.update(slug, body.frontmatter, body.content)
    return SuccessResponse()


@router.delete("/{slug:path}", response_model=SuccessResponse)
def delete_document(
    slug: str,
    repository: Annotated[DocumentRepository, Depends(get_document_repository)],
) -> SuccessResponse:
    repository.delete(slug)
    return SuccessResponse()
