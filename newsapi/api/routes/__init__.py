"""API route modules."""

from . import articles, health


__all__ = ["articles", "health"]
