"""API Routers Package.

Each router handles one area of the engine:
- layout.py: lane assignment and pairwise conflict analysis for rendering
- scheduling.py: candidate conflict checks, slot search and suggestions

Usage in main.py:
    from api.routers import layout_router, scheduling_router

    app.include_router(layout_router, prefix="/layout", tags=["layout"])
    app.include_router(scheduling_router, prefix="/scheduling", tags=["scheduling"])
"""

from .layout import router as layout_router
from .scheduling import router as scheduling_router

__all__ = [
    "layout_router",
    "scheduling_router",
]
