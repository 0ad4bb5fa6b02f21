from fastapi import APIRouter
from .waste_classification import router as waste_classification_router

router = APIRouter()

# Include all routers
router.include_router(waste_classification_router, tags=["Waste Classification"])

__all__ = ["router"]
