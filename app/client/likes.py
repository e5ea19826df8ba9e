"""
Per-browser like toggling and visit tracking.

Neither is enforced by the server: the liked flag lives only in the
visitor's local storage, so clearing it allows liking again.
"""
from __future__ import annotations

import logging
from typing import Optional

from app.client.api import APIError, PortfolioClient
from app.client.storage import LocalStorage

logger = logging.getLogger(__name__)

FLAG_TRUE = "true"


def liked_key(target_type: str, target_id: str) -> str:
    return f"liked_{target_type}_{target_id}"


class LikeToggle:
    """
    Like button state for one project or post.

    ``toggle()`` flips the flag and the displayed count immediately, then
    posts the change.  If the request fails both are restored.  A toggle
    issued while another is in flight is ignored.
    """

    def __init__(
        self,
        client: PortfolioClient,
        storage: LocalStorage,
        target_type: str,
        target_id: str,
        initial_likes: int = 0,
    ) -> None:
        self.client = client
        self.storage = storage
        self.target_type = target_type
        self.target_id = target_id
        self.key = liked_key(target_type, target_id)
        self.likes = max(0, initial_likes)
        self.liked = storage.get_item(self.key) == FLAG_TRUE
        self.loading = False

    def _apply(self, liked: bool, likes: int) -> None:
        self.liked = liked
        self.likes = likes
        if liked:
            self.storage.set_item(self.key, FLAG_TRUE)
        else:
            self.storage.remove_item(self.key)

    async def toggle(self) -> bool:
        """Returns False when ignored because a previous toggle is still running."""
        if self.loading:
            return False

        self.loading = True
        previous_liked, previous_likes = self.liked, self.likes

        if previous_liked:
            self._apply(False, max(0, previous_likes - 1))
        else:
            self._apply(True, previous_likes + 1)

        try:
            await self.client.like(
                self.target_type,
                self.target_id,
                "unlike" if previous_liked else "like",
            )
        except APIError as exc:
            logger.warning("Like toggle for %s reverted: %s", self.key, exc)
            self._apply(previous_liked, previous_likes)
        finally:
            self.loading = False

        return True


class VisitTracker:
    """Records each path at most once per storage."""

    def __init__(self, client: PortfolioClient, storage: LocalStorage) -> None:
        self.client = client
        self.storage = storage

    @staticmethod
    def visited_key(path: str) -> str:
        return f"visited_{path}"

    async def track(self, path: str, referrer: Optional[str] = None) -> bool:
        """True when a visit was recorded now; failures are logged and retried next time."""
        key = self.visited_key(path)
        if self.storage.get_item(key) == FLAG_TRUE:
            return False
        try:
            await self.client.record_visit(path, referrer)
        except APIError as exc:
            logger.warning("Could not record visit to %s: %s", path, exc)
            return False
        self.storage.set_item(key, FLAG_TRUE)
        return True
