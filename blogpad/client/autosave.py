"""Auto-save controller for the blog editor.

Edits are debounced, a periodic timer flushes as a backstop, and a save is
skipped when the draft matches the last saved snapshot or lacks a title or
content. Everything runs on one asyncio event loop, so the snapshot needs no
lock; only creates are serialized, so one unsaved post is never created twice.
"""

import asyncio
import json
import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from enum import StrEnum

import httpx

from blogpad.client.api import ApiError, BlogApiClient

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_MS = 5000
DEFAULT_INTERVAL_MS = 30000
DEFAULT_CLEAR_AFTER_MS = 3000
SAVE_FAILED_MESSAGE = "Failed to save"


class SaveStatus(StrEnum):
    """Save state shown next to the editor."""

    IDLE = "idle"
    SAVING = "saving"
    SAVED = "saved"
    ERROR = "error"


class SaveStatusIndicator:
    """Holds the current save status; "saved" reverts to idle after a delay."""

    def __init__(self, clear_after_ms: int = DEFAULT_CLEAR_AFTER_MS) -> None:
        self.clear_after_ms = clear_after_ms
        self.status = SaveStatus.IDLE
        self.message: str | None = None
        self._clear_handle: asyncio.TimerHandle | None = None

    @property
    def visible(self) -> bool:
        return self.status != SaveStatus.IDLE

    def set(self, status: SaveStatus, message: str | None = None) -> None:
        self._cancel_clear()
        self.status = status
        self.message = message
        if status == SaveStatus.SAVED:
            loop = asyncio.get_running_loop()
            self._clear_handle = loop.call_later(self.clear_after_ms / 1000, self._clear)

    def _clear(self) -> None:
        self._clear_handle = None
        self.status = SaveStatus.IDLE
        self.message = None

    def _cancel_clear(self) -> None:
        if self._clear_handle is not None:
            self._clear_handle.cancel()
            self._clear_handle = None

    def close(self) -> None:
        self._cancel_clear()


@dataclass(frozen=True)
class Draft:
    """The editable fields of a post."""

    title: str = ""
    content: str = ""
    tags: tuple[str, ...] = field(default_factory=tuple)

    def snapshot(self) -> str:
        """Serialized form used to detect no-op saves."""
        return json.dumps({"title": self.title, "content": self.content, "tags": list(self.tags)})

    def is_saveable(self) -> bool:
        return bool(self.title.strip()) and bool(self.content.strip())

    def payload(self) -> dict:
        return {"title": self.title, "content": self.content, "tags": list(self.tags)}


class AutoSaveController:
    """Keeps the server copy of an in-progress post converged with local edits.

    With a ``blog_id`` a save updates that blog; without one it creates a draft
    and hands the new blog to ``on_created``. Setting ``blog_id`` afterwards is
    the caller's job, after which saves become updates.

    Cancelling timers never cancels a save that is already in flight.
    """

    def __init__(
        self,
        api: BlogApiClient,
        blog_id: str | None = None,
        *,
        debounce_ms: int = DEFAULT_DEBOUNCE_MS,
        interval_ms: int = DEFAULT_INTERVAL_MS,
        indicator: SaveStatusIndicator | None = None,
        on_save_start: Callable[[], None] | None = None,
        on_save_success: Callable[[dict], None] | None = None,
        on_save_error: Callable[[str], None] | None = None,
        on_created: Callable[[dict], None] | None = None,
    ) -> None:
        self.api = api
        self.blog_id = blog_id
        self.debounce_ms = debounce_ms
        self.interval_ms = interval_ms
        self.indicator = indicator or SaveStatusIndicator()
        self.on_save_start = on_save_start
        self.on_save_success = on_save_success
        self.on_save_error = on_save_error
        self.on_created = on_created

        self.draft = Draft()
        self.last_saved_snapshot: str | None = None
        self._saving_snapshots: set[str] = set()
        self._debounce_task: asyncio.Task | None = None
        self._interval_task: asyncio.Task | None = None
        self._in_flight: set[asyncio.Task] = set()
        self._create_lock = asyncio.Lock()
        self._closed = False

    @property
    def status(self) -> SaveStatus:
        return self.indicator.status

    def start(self) -> None:
        """Start the periodic save timer."""
        if self._interval_task is None and not self._closed:
            self._interval_task = asyncio.create_task(self._run_interval())

    def edit(
        self,
        title: str | None = None,
        content: str | None = None,
        tags: list[str] | tuple[str, ...] | None = None,
    ) -> None:
        """Apply an edit and restart the debounce window.

        After ``close`` the draft still changes but nothing is scheduled.
        """
        changes: dict = {}
        if title is not None:
            changes["title"] = title
        if content is not None:
            changes["content"] = content
        if tags is not None:
            changes["tags"] = tuple(tags)
        self.draft = replace(self.draft, **changes)
        if not self._closed:
            self._restart_debounce()

    def mark_saved(self, draft: Draft | None = None) -> None:
        """Record a draft as already on the server, e.g. after loading or an explicit save."""
        if draft is not None:
            self.draft = draft
        self.last_saved_snapshot = self.draft.snapshot()

    def cancel_pending(self) -> None:
        """Drop a pending debounced save."""
        if self._debounce_task is not None:
            self._debounce_task.cancel()
            self._debounce_task = None

    def close(self) -> None:
        """Cancel both timers and stop scheduling saves for good."""
        self._closed = True
        self.cancel_pending()
        if self._interval_task is not None:
            self._interval_task.cancel()
            self._interval_task = None
        self.indicator.close()

    async def wait_idle(self) -> None:
        """Wait for saves already in flight to finish."""
        if self._in_flight:
            await asyncio.gather(*self._in_flight, return_exceptions=True)

    async def save_now(self) -> bool:
        """Save immediately, skipping the debounce but not the checks."""
        self.cancel_pending()
        if self._closed:
            return False
        return await self._save()

    def _restart_debounce(self) -> None:
        self.cancel_pending()
        self._debounce_task = asyncio.create_task(self._debounce())

    async def _debounce(self) -> None:
        await asyncio.sleep(self.debounce_ms / 1000)
        self._debounce_task = None
        self._spawn_save()

    async def _run_interval(self) -> None:
        while True:
            await asyncio.sleep(self.interval_ms / 1000)
            self._spawn_save()

    def _spawn_save(self) -> None:
        if self._closed:
            return
        task = asyncio.create_task(self._save())
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)

    async def _save(self) -> bool:
        if self.blog_id:
            return await self._save_once()
        # Only one create at a time; a waiting save then sees the adopted id
        async with self._create_lock:
            return await self._save_once()

    async def _save_once(self) -> bool:
        draft = self.draft
        snapshot = draft.snapshot()

        if snapshot == self.last_saved_snapshot or snapshot in self._saving_snapshots:
            return False
        if not draft.is_saveable():
            return False

        self._saving_snapshots.add(snapshot)
        self.indicator.set(SaveStatus.SAVING)

        try:
            if self.on_save_start:
                self.on_save_start()
            if self.blog_id:
                blog = await self.api.update_blog(self.blog_id, draft.payload())
                self.last_saved_snapshot = snapshot
            else:
                blog = await self.api.save_draft(draft.title, draft.content, list(draft.tags))
                self.last_saved_snapshot = snapshot
                if self.on_created:
                    self.on_created(blog)

            self.indicator.set(SaveStatus.SAVED)
            if self.on_save_success:
                self.on_save_success(blog)
        except (ApiError, httpx.HTTPError) as e:
            message = getattr(e, "message", None) or str(e) or SAVE_FAILED_MESSAGE
            logger.warning(f"Auto-save failed: {message}")
            self._report_error(message)
            return False
        except Exception:
            logger.exception("Auto-save failed")
            self._report_error(SAVE_FAILED_MESSAGE)
            return False
        finally:
            self._saving_snapshots.discard(snapshot)

        logger.debug(f"Auto-saved blog {blog.get('id')}")
        return True

    def _report_error(self, message: str) -> None:
        self.indicator.set(SaveStatus.ERROR, message)
        if self.on_save_error:
            self.on_save_error(message)
