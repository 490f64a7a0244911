"""Configuration module for the SellerCenter client."""

from sellercenter.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
