from .planning import router as planning_routes

__all__ = [
    "planning_routes",
]
