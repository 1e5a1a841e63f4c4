"""Editor session: local post state, auto-save wiring and explicit actions."""

import logging
import math

from blogpad.client.api import BlogApiClient
from blogpad.client.autosave import (
    DEFAULT_CLEAR_AFTER_MS,
    DEFAULT_DEBOUNCE_MS,
    DEFAULT_INTERVAL_MS,
    AutoSaveController,
    Draft,
    SaveStatusIndicator,
)
from blogpad.exceptions import ValidationError
from blogpad.models.enums import BlogStatus

logger = logging.getLogger(__name__)

WORDS_PER_MINUTE = 200


def parse_tags(tags_input: str) -> list[str]:
    """Split comma-separated tag text into trimmed, non-empty tags."""
    return [tag.strip() for tag in tags_input.split(",") if tag.strip()]


class EditorSession:
    """State of one open editor.

    Owns an AutoSaveController and adopts the id of a blog once the first
    create succeeds, so later saves update it. Explicit actions raise on
    failure and leave the local fields untouched.
    """

    def __init__(
        self,
        api: BlogApiClient,
        blog_id: str | None = None,
        *,
        debounce_ms: int = DEFAULT_DEBOUNCE_MS,
        interval_ms: int = DEFAULT_INTERVAL_MS,
        clear_after_ms: int = DEFAULT_CLEAR_AFTER_MS,
    ) -> None:
        self.api = api
        self.blog_id = blog_id
        self.title = ""
        self.content = ""
        self.tags_input = ""
        self.status: BlogStatus | None = None
        self.indicator = SaveStatusIndicator(clear_after_ms)
        self.autosave = AutoSaveController(
            api,
            blog_id,
            debounce_ms=debounce_ms,
            interval_ms=interval_ms,
            indicator=self.indicator,
            on_created=self._adopt,
        )

    @property
    def tags(self) -> list[str]:
        return parse_tags(self.tags_input)

    @property
    def draft(self) -> Draft:
        return Draft(self.title, self.content, tuple(self.tags))

    async def open(self) -> None:
        """Load an existing blog if there is one and start the periodic save."""
        if self.blog_id:
            await self.load()
        self.autosave.start()

    async def load(self) -> dict:
        blog = await self.api.get_blog(self.blog_id)
        self.title = blog.get("title") or ""
        self.content = blog.get("content") or ""
        self.tags_input = ", ".join(blog.get("tags") or [])
        self.status = BlogStatus(blog["status"])
        self.autosave.mark_saved(self.draft)
        return blog

    def set_title(self, title: str) -> None:
        self.title = title
        self._changed()

    def set_content(self, content: str) -> None:
        self.content = content
        self._changed()

    def set_tags_input(self, tags_input: str) -> None:
        self.tags_input = tags_input
        self._changed()

    def _changed(self) -> None:
        self.autosave.edit(title=self.title, content=self.content, tags=self.tags)

    def _adopt(self, blog: dict) -> None:
        self.blog_id = blog["id"]
        self.autosave.blog_id = blog["id"]
        self.status = BlogStatus(blog["status"])

    def _require_content(self) -> None:
        if not self.title.strip() or not self.content.strip():
            raise ValidationError("Please add a title and content")

    async def save_draft(self) -> dict:
        """Save as a draft: update the open blog or create a new one."""
        return await self._save_as(BlogStatus.DRAFT)

    async def publish(self) -> dict:
        """Publish: update the open blog or create it already published."""
        return await self._save_as(BlogStatus.PUBLISHED)

    async def _save_as(self, status: BlogStatus) -> dict:
        self._require_content()
        draft = self.draft
        if self.blog_id:
            blog = await self.api.update_blog(
                self.blog_id, {**draft.payload(), "status": status.value}
            )
        elif status == BlogStatus.PUBLISHED:
            blog = await self.api.publish(draft.title, draft.content, list(draft.tags))
        else:
            blog = await self.api.save_draft(draft.title, draft.content, list(draft.tags))

        self._adopt(blog)
        self.autosave.mark_saved(draft)
        logger.info(f"Saved blog {blog['id']} as {status.value}")
        return blog

    async def delete(self) -> dict:
        """Delete the open blog and stop auto-saving it."""
        if not self.blog_id:
            raise ValidationError("Nothing to delete")
        result = await self.api.delete_blog(self.blog_id)
        self.autosave.close()
        self.blog_id = None
        self.autosave.blog_id = None
        return result

    async def close(self) -> None:
        """Stop the timers and let in-flight saves finish."""
        self.autosave.close()
        await self.autosave.wait_idle()

    def word_count(self) -> int:
        return len(self.content.split())

    def reading_time(self) -> int:
        """Minutes to read the content at WORDS_PER_MINUTE."""
        return math.ceil(self.word_count() / WORDS_PER_MINUTE)
