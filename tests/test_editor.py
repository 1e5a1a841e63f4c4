"""Tests for the editor session."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from blogpad.client.api import ApiError, BlogApiClient
from blogpad.client.autosave import SaveStatus
from blogpad.client.editor import EditorSession, parse_tags
from blogpad.exceptions import ValidationError
from blogpad.models.enums import BlogStatus


def make_api() -> AsyncMock:
    api = AsyncMock(spec=BlogApiClient)
    api.save_draft.return_value = {"id": "b1", "status": "draft"}
    api.publish.return_value = {"id": "b1", "status": "published"}
    api.update_blog.return_value = {"id": "b1", "status": "draft"}
    api.get_blog.return_value = {
        "id": "b1",
        "title": "Loaded",
        "content": "From server",
        "tags": ["one", "two"],
        "status": "draft",
    }
    api.delete_blog.return_value = {"message": "Blog deleted successfully"}
    return api


@pytest.mark.parametrize(
    "text,expected",
    [
        ("", []),
        ("python", ["python"]),
        (" python , web ,, ", ["python", "web"]),
        ("a,b,c", ["a", "b", "c"]),
    ],
)
def test_parse_tags(text, expected):
    assert parse_tags(text) == expected


def test_word_count_and_reading_time():
    session = EditorSession(make_api())
    session.content = "word " * 401
    assert session.word_count() == 401
    assert session.reading_time() == 3

    session.content = ""
    assert session.reading_time() == 0


class TestExplicitActions:
    @pytest.mark.asyncio
    async def test_save_draft_creates_then_updates(self):
        api = make_api()
        session = EditorSession(api)
        session.title = "Hi"
        session.content = "Body"
        session.tags_input = "a, b"

        await session.save_draft()
        api.save_draft.assert_awaited_once_with("Hi", "Body", ["a", "b"])
        assert session.blog_id == "b1"
        assert session.autosave.blog_id == "b1"

        await session.save_draft()
        api.update_blog.assert_awaited_once_with(
            "b1", {"title": "Hi", "content": "Body", "tags": ["a", "b"], "status": "draft"}
        )

    @pytest.mark.asyncio
    async def test_publish_new_post(self):
        api = make_api()
        session = EditorSession(api)
        session.title = "Hi"
        session.content = "Body"

        blog = await session.publish()

        api.publish.assert_awaited_once_with("Hi", "Body", [])
        assert blog["status"] == "published"
        assert session.status == BlogStatus.PUBLISHED

    @pytest.mark.asyncio
    async def test_publish_existing_post_updates_status(self):
        api = make_api()
        api.update_blog.return_value = {"id": "b1", "status": "published"}
        session = EditorSession(api, blog_id="b1")
        session.title = "Hi"
        session.content = "Body"

        await session.publish()

        api.update_blog.assert_awaited_once_with(
            "b1", {"title": "Hi", "content": "Body", "tags": [], "status": "published"}
        )
        api.publish.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_requires_title_and_content(self):
        api = make_api()
        session = EditorSession(api)
        session.title = "  "
        session.content = "Body"

        with pytest.raises(ValidationError):
            await session.publish()
        api.publish.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_failure_leaves_state_unchanged(self):
        api = make_api()
        api.update_blog.side_effect = ApiError("Server error", 500)
        session = EditorSession(api, blog_id="b1")
        session.title = "Hi"
        session.content = "Body"

        with pytest.raises(ApiError):
            await session.publish()

        assert session.blog_id == "b1"
        assert session.title == "Hi"
        assert session.autosave.last_saved_snapshot is None

    @pytest.mark.asyncio
    async def test_explicit_save_marks_draft_saved(self):
        api = make_api()
        session = EditorSession(api)
        session.title = "Hi"
        session.content = "Body"
        await session.save_draft()

        session.autosave.draft = session.draft
        assert await session.autosave.save_now() is False
        api.update_blog.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete(self):
        api = make_api()
        session = EditorSession(api, blog_id="b1")

        await session.delete()

        api.delete_blog.assert_awaited_once_with("b1")
        assert session.blog_id is None

    @pytest.mark.asyncio
    async def test_edits_after_delete_are_not_saved(self):
        api = make_api()
        session = EditorSession(api, debounce_ms=20, interval_ms=20)
        await session.open()

        session.set_title("Short-lived")
        session.set_content("Post")
        await session.save_draft()
        await session.delete()

        session.set_content("more text")
        await asyncio.sleep(0.1)

        api.save_draft.assert_awaited_once()
        api.update_blog.assert_not_awaited()
        assert session.blog_id is None
        await session.close()

    @pytest.mark.asyncio
    async def test_delete_without_blog(self):
        session = EditorSession(make_api())
        with pytest.raises(ValidationError):
            await session.delete()


class TestAutoSaveWiring:
    @pytest.mark.asyncio
    async def test_open_loads_existing_blog_without_saving(self):
        api = make_api()
        session = EditorSession(api, blog_id="b1", debounce_ms=20, interval_ms=20)

        await session.open()
        await asyncio.sleep(0.1)

        assert session.title == "Loaded"
        assert session.tags_input == "one, two"
        assert session.status == BlogStatus.DRAFT
        api.update_blog.assert_not_awaited()
        await session.close()

    @pytest.mark.asyncio
    async def test_first_autosave_creates_and_adopts_id(self):
        api = make_api()
        session = EditorSession(api, debounce_ms=20)

        session.set_title("Fresh")
        session.set_content("Post")
        await asyncio.sleep(0.1)

        api.save_draft.assert_awaited_once_with("Fresh", "Post", [])
        assert session.blog_id == "b1"

        session.set_tags_input("later")
        await asyncio.sleep(0.1)

        api.update_blog.assert_awaited_once_with(
            "b1", {"title": "Fresh", "content": "Post", "tags": ["later"]}
        )
        assert session.indicator.status == SaveStatus.SAVED
        await session.close()


@pytest.mark.asyncio
async def test_editor_against_running_app(asgi_transport):
    """Drive the real API through the client, controller and session."""
    api = BlogApiClient("http://testserver/api", transport=asgi_transport)
    await api.register("Ann", "ann@x.com", "secret1")

    session = EditorSession(api, debounce_ms=20, interval_ms=60_000)
    await session.open()

    session.set_title("Hi")
    session.set_content("Body")
    await asyncio.sleep(0.2)
    await session.autosave.wait_idle()
    assert session.blog_id is not None

    session.set_content("Body, edited")
    assert await session.autosave.save_now() is True

    published = await session.publish()
    assert published["status"] == "published"
    assert published["content"] == "Body, edited"

    blogs = await api.list_blogs()
    assert [b["id"] for b in blogs] == [session.blog_id]

    found = await api.search_blogs("EDITED")
    assert [b["id"] for b in found] == [session.blog_id]

    blog_id = session.blog_id
    await session.delete()
    with pytest.raises(ApiError) as exc_info:
        await api.get_blog(blog_id)
    assert exc_info.value.status_code == 404

    await session.close()
