"""Tag and topic management with a cached listing."""

from __future__ import annotations

import logging

from folio.api.constants import LABEL_NAME_MAX_LENGTH
from folio.api.core.errors import InternalError, ValidationError
from folio.api.helpers import check_max_length, collapse_whitespace, normalize_label_id, slugify
from folio.api.repositories.base import LabelsRepository, TagsRepository, TopicsRepository
from folio.api.schemas.labels import Label, LabelCreation

from .cache import CollectionCache

logger = logging.getLogger(__name__)


class LabelsService:
    """CRUD over tags or topics.

    The full listing is served from a ``CollectionCache`` which every
    successful write refreshes before returning.
    """

    record_type = "label"

    def __init__(self, repository: LabelsRepository):
        self._repository = repository
        self._cache: CollectionCache[Label] = CollectionCache(repository.list, name=self.record_type)

    def _prepare(self, creation: LabelCreation | None) -> tuple[str, str]:
        if creation is None:
            raise InternalError(f"Cannot save a {self.record_type} from a missing payload.")

        name = collapse_whitespace(creation.name)
        if not name:
            raise ValidationError("name", "required")
        check_max_length("name", name, LABEL_NAME_MAX_LENGTH)

        label_id = slugify(name)
        if not label_id:
            raise ValidationError("name", "alphanum")
        return label_id, name

    async def create(self, creation: LabelCreation | None) -> str:
        """Create a label and return its kebab-case id."""
        label_id, name = self._prepare(creation)
        await self._repository.create(label_id, name)
        await self._cache.refresh()
        return label_id

    async def list(self) -> list[Label]:
        return await self._cache.get()

    async def update(self, label_id: str, creation: LabelCreation | None) -> str:
        """Rename a label and return its new id."""
        label_id = normalize_label_id(label_id)
        new_id, name = self._prepare(creation)
        await self._repository.update(label_id, new_id, name)
        await self._cache.refresh()
        return new_id

    async def remove(self, label_id: str) -> None:
        await self._repository.remove(normalize_label_id(label_id))
        await self._cache.refresh()

    async def refresh(self) -> None:
        await self._cache.refresh()


class TagsService(LabelsService):
    record_type = "tag"

    def __init__(self, repository: TagsRepository):
        super().__init__(repository)


class TopicsService(LabelsService):
    record_type = "topic"

    def __init__(self, repository: TopicsRepository):
        super().__init__(repository)
