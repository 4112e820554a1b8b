from fastapi import APIRouter

from recordhub.api.v1.endpoints import b2b, finance, government, health, personal, triplets

# Create API router
api_router = APIRouter()

# Include routers
api_router.include_router(triplets.router, prefix="/triplets", tags=["Triplets"])
api_router.include_router(health.router, prefix="/health", tags=["Health"])
api_router.include_router(finance.router, prefix="/finance", tags=["Finance"])
api_router.include_router(personal.router, prefix="/personal", tags=["Personal"])
api_router.include_router(b2b.router, prefix="/b2b", tags=["B2B"])
api_router.include_router(government.router, prefix="/government", tags=["Government"])

__all__ = ["api_router"]
