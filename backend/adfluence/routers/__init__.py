"""API routers."""

from adfluence.routers import auth, niches, campaigns, dashboard, health

__all__ = ["auth", "niches", "campaigns", "dashboard", "health"]
