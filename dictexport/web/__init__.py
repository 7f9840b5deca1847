"""Web application package for dictexport."""

from typing import Any, Dict, Optional

from flask import Flask

from dictexport.config import load_config


def create_app(config: Optional[Dict[str, Any]] = None) -> Flask:
    """Application factory for the web interface."""
    from .app import build_app  # Import here to avoid circular imports

    return build_app(config if config is not None else load_config())


__all__ = ["create_app"]
