"""Git backend providing the commit graph"""

from kahva.git_backend.repository import KahvaRepository

__all__ = ["KahvaRepository"]
