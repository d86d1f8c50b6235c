"""
Core application wiring: lifespan, CORS and error handlers.
"""

from .cors import configure_cors
from .errors import register_exception_handlers
from .lifespan import lifespan

__all__ = ["configure_cors", "lifespan", "register_exception_handlers"]
