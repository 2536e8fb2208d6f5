"""Service module

Business rules of the archive: validation, slug and read-time derivation,
and the draft → publish → patch → release lifecycle.
"""

from .articles import ArticlesService
from .cache import CollectionCache
from .drafts import DraftsService
from .labels import LabelsService, TagsService, TopicsService
from .patches import PatchesService

__all__ = [
    "ArticlesService",
    "DraftsService",
    "PatchesService",
    "LabelsService",
    "TagsService",
    "TopicsService",
    "CollectionCache",
]
