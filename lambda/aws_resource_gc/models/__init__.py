"""Data models for the resource garbage collector."""

from .cleanup_scope import CleanupScope

__all__ = ["CleanupScope"]
