"""Route registration helpers."""

from .activities import register_activity_routes
from .health import register_health_routes
from .mood import register_mood_routes

__all__ = [
    "register_activity_routes",
    "register_health_routes",
    "register_mood_routes",
]
