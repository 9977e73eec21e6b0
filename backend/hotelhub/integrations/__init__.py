"""Integration shortcuts."""

from .marketplace_client import MarketplaceClient

__all__ = ["MarketplaceClient"]
