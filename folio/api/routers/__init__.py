"""API Routers package."""

from . import articles, auth, drafts, health, labels, patches

__all__ = [
    "articles",
    "auth",
    "drafts",
    "health",
    "labels",
    "patches",
]
