"""API routers."""

from app.api.routes import blobs, categories, files, shares, users

__all__ = ["blobs", "categories", "files", "shares", "users"]
