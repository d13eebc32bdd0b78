"""
API route modules.
"""

from api.routes.albums import router as albums_router

__all__ = ["albums_router"]
