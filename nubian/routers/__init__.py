"""API routers."""

from nubian.routers import health, papers, keywords, fields, users, donations

__all__ = ["health", "papers", "keywords", "fields", "users", "donations"]
