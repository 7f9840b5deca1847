"""Route blueprints for the web application."""

from .exports import exports_bp

__all__ = [
    "exports_bp",
]
