"""Client side of the puzzle game: HTTP client and the solving session engine."""

from .api import ApiError, GroupApiClient
from .session import CategoryView, PuzzleView, SolveSession, WordView, shuffle

__all__ = [
    'ApiError',
    'CategoryView',
    'GroupApiClient',
    'PuzzleView',
    'SolveSession',
    'WordView',
    'shuffle',
]
