"""HTTP surface for the resume checker."""

from .app import create_app

__all__ = ["create_app"]
