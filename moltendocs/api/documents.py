"""Public read-only endpoints: flat document list, page tree and single pages."""

from typing import Annotated

from fastapi import APIRouter, Depends

from moltendocs.schemas.documents import DocPage, DocumentsResponse, PagesResponse
from moltendocs.services.documents import DocumentRepository, get_document_repository
from moltendocs.services.navigation import NavigationBuilder

router = APIRouter()


def get_navigation_builder(
    repository: Annotated[DocumentRepository, Depends(get_document_repository)],
) -> NavigationBuilder:
    return NavigationBuilder(repository)


@router.get("/documents", response_model=DocumentsResponse, response_model_exclude_none=True)
def list_documents(
    repository: Annotated[DocumentRepository, Depends(get_document_repository)],
) -> DocumentsResponse:
    """All documents except section index pages, in manual order then by title."""
    return DocumentsResponse(documents=repository.list_flat())


@router.get("/pages", response_model=PagesResponse, response_model_exclude_none=True)
def list_pages(
    navigation: Annotated[NavigationBuilder, Depends(get_navigation_builder)],
) -> PagesResponse:
    """Directory tree for the sidebar. Rebuilt from disk on every request."""
    return PagesResponse(pages=navigation.build_tree())


@router.get("/docs/{slug:path}", response_model=DocPage)
def get_page(
    slug: str,
    navigation: Annotated[NavigationBuilder, Depends(get_navigation_builder)],
) -> DocPage:
    """One page with its markdown body and the next page in the same section."""
    return navigation.resolve_page(slug)
