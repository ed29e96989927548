"""API interface for lifedash.

This module exports the FastAPI router and app factory.
"""

from lifedash.interfaces.api.app import create_app
from lifedash.interfaces.api.routes import router

__all__ = ["router", "create_app"]
