"""HTTP routes."""

from quotecalc.api.router import api_router

__all__ = ["api_router"]
