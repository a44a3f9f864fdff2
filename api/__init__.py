"""
TV Catalog REST API.

FastAPI application exposing CRUD routes for shows, seasons, episodes,
characters and actors, episode links, query jobs and admin
export/import endpoints.
"""

from api.main import app

__all__ = ["app"]
