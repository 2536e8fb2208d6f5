"""Tests for the drafts and patches endpoints."""

from unittest.mock import AsyncMock

import httpx
import pytest

from folio.api.core.errors import PROBLEM_CONTENT_TYPE, NotFoundError
from folio.api.schemas.articles import Article, ArticlePatch


class TestDraftsRouter:
    """Tests for /archive.drafts.*"""

    @pytest.mark.asyncio
    async def test_requires_editor(self, client: httpx.AsyncClient, mock_archive: AsyncMock) -> None:
        response = await client.post("/archive.drafts.start", json={"title": "Hello"})

        assert response.status_code == 401
        assert response.headers["content-type"] == PROBLEM_CONTENT_TYPE
        assert response.headers["www-authenticate"] == "Bearer"
        assert response.json()["status"] == 401
        mock_archive.draft.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_start(self, editor_client: httpx.AsyncClient, mock_archive: AsyncMock, article_id: str) -> None:
        mock_archive.draft.return_value = article_id

        response = await editor_client.post("/archive.drafts.start", json={"title": "Hello", "content": "World"})

        assert response.status_code == 201
        assert response.json() == {"draft_uuid": article_id}

    @pytest.mark.asyncio
    async def test_derived_fields_are_not_accepted(
        self, editor_client: httpx.AsyncClient, mock_archive: AsyncMock, article_id: str
    ) -> None:
        """Clients cannot choose the slug or read time."""
        mock_archive.draft.return_value = article_id

        await editor_client.post(
            "/archive.drafts.start", json={"title": "Hello", "slug": "chosen", "read_time": 99}
        )

        creation = mock_archive.draft.await_args.args[0]
        assert (creation.slug, creation.read_time) == ("hello", 1)

    @pytest.mark.asyncio
    async def test_validation_problem(self, editor_client: httpx.AsyncClient) -> None:
        response = await editor_client.post("/archive.drafts.start", json={"title": "a" * 300})

        assert response.status_code == 422
        body = response.json()
        assert body["title"] == "Failed to validate request data."
        assert body["errors"] == [{"field": "title", "criterion": "max", "parameter": "256"}]
        assert body["instance"] == "/archive.drafts.start"

    @pytest.mark.asyncio
    async def test_missing_body_field(self, editor_client: httpx.AsyncClient) -> None:
        response = await editor_client.post("/archive.drafts.publish", json={})

        assert response.status_code == 422
        assert response.json()["errors"][0]["field"] == "draft_uuid"
        assert response.json()["errors"][0]["criterion"] == "required"

    @pytest.mark.asyncio
    async def test_invalid_uuid(self, editor_client: httpx.AsyncClient) -> None:
        response = await editor_client.post("/archive.drafts.publish", json={"draft_uuid": "nope"})

        assert response.status_code == 422
        assert response.json()["wrong_uuid"] == "nope"

    @pytest.mark.asyncio
    async def test_publish(self, editor_client: httpx.AsyncClient, mock_archive: AsyncMock, article_id: str) -> None:
        response = await editor_client.post("/archive.drafts.publish", json={"draft_uuid": article_id})

        assert response.status_code == 204
        mock_archive.publish.assert_awaited_once_with(article_id)

    @pytest.mark.asyncio
    async def test_info_not_found(self, editor_client: httpx.AsyncClient, mock_archive: AsyncMock, article_id: str) -> None:
        mock_archive.get_by_id.side_effect = NotFoundError(article_id, "draft")

        response = await editor_client.get("/archive.drafts.info", params={"draft_uuid": article_id})

        assert response.status_code == 404
        assert response.json()["record_type"] == "draft"

    @pytest.mark.asyncio
    async def test_list(self, editor_client: httpx.AsyncClient, mock_archive: AsyncMock) -> None:
        mock_archive.list.return_value = []

        response = await editor_client.get("/archive.drafts.list", params={"search": "hello", "rpp": 5})

        assert response.status_code == 200
        article_filter = mock_archive.list.await_args.args[0]
        assert (article_filter.search, article_filter.rpp) == ("hello", 5)

    @pytest.mark.asyncio
    async def test_share(self, editor_client: httpx.AsyncClient, mock_archive: AsyncMock, article_id: str) -> None:
        mock_archive.share.return_value = "/archive/s/abc"

        response = await editor_client.post("/archive.drafts.share", json={"draft_uuid": article_id})

        assert response.json() == {"shareable_link": "/archive/s/abc"}

    @pytest.mark.asyncio
    async def test_share_failure_body_has_blank_link(
        self, editor_client: httpx.AsyncClient, mock_archive: AsyncMock, article_id: str
    ) -> None:
        mock_archive.share.side_effect = NotFoundError(article_id, "draft")

        response = await editor_client.post("/archive.drafts.share", json={"draft_uuid": article_id})

        assert response.status_code == 404
        assert response.json()["shareable_link"] == "about:blank"

    @pytest.mark.asyncio
    async def test_revise(self, editor_client: httpx.AsyncClient, mock_archive: AsyncMock, article_id: str) -> None:
        response = await editor_client.post(
            "/archive.drafts.revise", json={"draft_uuid": article_id, "topic": "python"}
        )

        assert response.status_code == 204
        revision = mock_archive.revise.await_args.args[1]
        assert revision.topic == "python"

    @pytest.mark.asyncio
    async def test_tags(self, editor_client: httpx.AsyncClient, mock_archive: AsyncMock, article_id: str) -> None:
        body = {"draft_uuid": article_id, "tag_id": "python"}

        assert (await editor_client.post("/archive.drafts.tags.add", json=body)).status_code == 204
        assert (await editor_client.post("/archive.drafts.tags.remove", json=body)).status_code == 204
        mock_archive.add_tag.assert_awaited_once_with(article_id, "python", is_draft=True)

    @pytest.mark.asyncio
    async def test_unexpected_error(self, editor_client: httpx.AsyncClient, mock_archive: AsyncMock, article_id: str) -> None:
        """Unexpected failures become a 500 problem without internals."""
        mock_archive.discard.side_effect = RuntimeError("secret database detail")

        response = await editor_client.post("/archive.drafts.discard", json={"draft_uuid": article_id})

        assert response.status_code == 500
        body = response.json()
        assert body["status"] == 500
        assert "secret" not in body["detail"]
        assert "request_id" in body


class TestPatchesRouter:
    """Tests for /archive.patches.*"""

    @pytest.mark.asyncio
    async def test_list(self, editor_client: httpx.AsyncClient, mock_archive: AsyncMock, article_id: str) -> None:
        mock_archive.list_patches.return_value = [ArticlePatch(article_uuid=article_id, title="New")]

        response = await editor_client.get("/archive.patches.list")

        assert response.status_code == 200
        assert response.json()[0]["article_uuid"] == article_id

    @pytest.mark.asyncio
    async def test_revise(self, editor_client: httpx.AsyncClient, mock_archive: AsyncMock, article_id: str) -> None:
        mock_archive.get_patch.return_value = ArticlePatch(article_uuid=article_id)
        mock_archive.get_by_id.return_value = Article(uuid=article_id, title="Old", slug="old", is_draft=False)

        response = await editor_client.post(
            "/archive.patches.revise", json={"article_uuid": article_id, "title": "New Title"}
        )

        assert response.status_code == 204
        assert mock_archive.revise.await_args.args[1].slug == "new-title"

    @pytest.mark.asyncio
    async def test_release(self, editor_client: httpx.AsyncClient, mock_archive: AsyncMock, article_id: str) -> None:
        response = await editor_client.post("/archive.patches.release", json={"article_uuid": article_id})

        assert response.status_code == 204
        mock_archive.release.assert_awaited_once_with(article_id)

    @pytest.mark.asyncio
    async def test_discard_missing_patch(
        self, editor_client: httpx.AsyncClient, mock_archive: AsyncMock, article_id: str
    ) -> None:
        mock_archive.get_patch.side_effect = NotFoundError(article_id, "article patch")

        response = await editor_client.post("/archive.patches.discard", json={"article_uuid": article_id})

        assert response.status_code == 404
        mock_archive.discard.assert_not_awaited()
