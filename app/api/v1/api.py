"""Router API principal"""
from fastapi import APIRouter, Depends

from app.api.deps import require_admin
from app.api.v1.endpoints import admin, auth, buyer, properties, seller

# Créer le router principal
api_router = APIRouter()

# ==================== AUTH ====================
api_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["Auth"]
)

# ==================== ADMIN ====================
api_router.include_router(
    admin.router,
    prefix="/admin",
    tags=["Admin"],
    dependencies=[Depends(require_admin)]
)

# ==================== SELLER ====================
api_router.include_router(
    seller.router,
    prefix="/seller",
    tags=["Seller"]
)

# ==================== BUYER ====================
api_router.include_router(
    buyer.router,
    prefix="/buyer",
    tags=["Buyer"]
)

# ==================== PROPERTIES ====================
api_router.include_router(
    properties.router,
    prefix="/properties",
    tags=["Properties"]
)
