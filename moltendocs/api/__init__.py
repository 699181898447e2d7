"""API routes. Everything under /admin sits behind the session access guard."""

from fastapi import APIRouter, Depends

from moltendocs.api import admin_documents, admin_order, admin_users, auth, documents, health
from moltendocs.api.auth import require_user

admin_router = APIRouter(dependencies=[Depends(require_user)])
admin_router.include_router(admin_documents.router, prefix="/documents", tags=["admin"])
admin_router.include_router(admin_users.router, prefix="/users", tags=["admin"])
admin_router.include_router(admin_order.router, prefix="/order", tags=["admin"])

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(documents.router, tags=["documents"])
router.include_router(admin_router, prefix="/admin")
