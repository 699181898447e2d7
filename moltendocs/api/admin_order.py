"""Admin endpoints that persist manual ordering records."""

from typing import Annotated

from fastapi import APIRouter, Depends

from moltendocs.schemas.auth import SuccessResponse
from moltendocs.schemas.order import DirectoryOrderRequest, GlobalOrderRequest
from moltendocs.services.documents import get_order_store
from moltendocs.services.ordering import OrderStore, validate_order_list

router = APIRouter()


@router.put("", response_model=SuccessResponse)
def save_document_order(
    body: GlobalOrderRequest,
    order_store: Annotated[OrderStore, Depends(get_order_store)],
) -> SuccessResponse:
    """Store the display order of the flat document listing (full slugs)."""
    documents = validate_order_list(body.documents, "documents")
    order_store.save_global_documents(documents)
    return SuccessResponse()


@router.put("/pages", response_model=SuccessResponse)
def save_directory_order(
    body: DirectoryOrderRequest,
    order_store: Annotated[OrderStore, Depends(get_order_store)],
) -> SuccessResponse:
    """Store the display order of one directory of the page tree (entry names)."""
    order = validate_order_list(body.order, "order")
    order_store.save_directory_order(body.dir_slug, order)
    return SuccessResponse()
