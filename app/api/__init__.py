"""API layer module.

Contains FastAPI routers and error/status schemas.
"""

from app.api.health import router as health_router
from app.api.products import router as products_router

__all__ = [
    "health_router",
    "products_router",
]
