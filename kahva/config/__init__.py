"""Configuration"""

from kahva.config.settings import Settings

__all__ = ["Settings"]
