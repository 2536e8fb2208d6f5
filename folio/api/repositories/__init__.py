"""Archive storage: abstract interfaces and their SQLAlchemy implementations."""

from .archive import SQLArchiveRepository
from .base import ArchiveRepository, LabelsRepository, TagsRepository, TopicsRepository
from .labels import SQLLabelsRepository, SQLTagsRepository, SQLTopicsRepository

__all__ = [
    # Interfaces
    "ArchiveRepository",
    "LabelsRepository",
    "TagsRepository",
    "TopicsRepository",
    # SQLAlchemy
    "SQLArchiveRepository",
    "SQLLabelsRepository",
    "SQLTagsRepository",
    "SQLTopicsRepository",
]
