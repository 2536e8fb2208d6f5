"""Database module for the archive.

This module provides:
- SQLAlchemy models for articles, patches, links, tags and topics
- DBManager for engine and session lifecycle
"""

from .manager import DEFAULT_DATABASE_URL, DBManager
from .models import Article, ArticleLink, ArticlePatch, Base, Tag, Topic, article_tag

__all__ = [
    # Base class
    "Base",
    # Models
    "Article",
    "ArticlePatch",
    "ArticleLink",
    "Tag",
    "Topic",
    "article_tag",
    # Manager
    "DBManager",
    "DEFAULT_DATABASE_URL",
]
