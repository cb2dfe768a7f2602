"""Application route blueprints."""

from .sort import sort_bp

__all__ = ["sort_bp"]
