"""
Analytics routers - /api/analytics/*
"""

from .routes import router

__all__ = ["router"]
