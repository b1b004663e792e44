"""API Routes."""

from fastapi import APIRouter

from .admin import router as admin_router
from .audience import router as audience_router
from .auth import router as auth_router
from .campaigns import router as campaigns_router
from .health import router as health_router
from .logs import router as logs_router
from .newsrooms import router as newsrooms_router
from .objects import router as objects_router
from .plans import router as plans_router
from .prompts import router as prompts_router
from .quickstart import router as quickstart_router
from .templates import router as templates_router

# Create main API router
api_router = APIRouter()

# Include route modules
api_router.include_router(health_router, tags=["Health"])
api_router.include_router(auth_router)
api_router.include_router(newsrooms_router)
api_router.include_router(campaigns_router)
api_router.include_router(plans_router)
api_router.include_router(quickstart_router)
api_router.include_router(templates_router)
api_router.include_router(audience_router)
api_router.include_router(prompts_router)
api_router.include_router(objects_router)
api_router.include_router(logs_router)
api_router.include_router(admin_router)
