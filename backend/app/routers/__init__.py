"""Credit Builder - API Routers"""
from .profiles import router as profiles_router
from .disputes import router as disputes_router
from .creditors import router as creditors_router
from .guidance import router as guidance_router

__all__ = [
    "profiles_router",
    "disputes_router",
    "creditors_router",
    "guidance_router",
]
