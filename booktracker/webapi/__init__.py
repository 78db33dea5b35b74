"""FastAPI adapter exposing the booktracker core over HTTP."""

from .application import create_app

__all__ = ["create_app"]
