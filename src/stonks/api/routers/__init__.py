"""API routers package."""

from stonks.api.routers.portfolio import router as portfolio_router
from stonks.api.routers.market import router as market_router
from stonks.api.routers.config import router as config_router

__all__ = [
    "portfolio_router",
    "market_router",
    "config_router",
]
