"""
Configuration module for recipebump.

Uses pydantic-settings for environment variable loading.
"""

from recipebump.config.settings import Settings

__all__ = ["Settings"]
