"""Path revalidation backed by Redis.

After a mutating action the rendering tier must regenerate the pages that
showed the old data. Actions record those pages here; the renderer consumes
them on its next request for the page.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any

import redis

from threadline.core.settings import settings

logger = logging.getLogger(__name__)


class RevalidationService:
    """Records rendered paths whose cached output is stale."""

    def __init__(self, client: Any, key: str | None = None) -> None:
        self._redis = client
        self._key = key or settings.stale_paths_key

    def mark_stale(self, path: str) -> None:
        """Flag ``path`` for regeneration.

        The writes that made the page stale have already committed, so a
        Redis failure is logged rather than raised.
        """
        if not path:
            return
        try:
            self._redis.sadd(self._key, path)
        except redis.RedisError as exc:
            logger.warning("Could not mark %s stale: %s", path, exc)
            return
        logger.debug("Marked %s stale", path)

    def is_stale(self, path: str) -> bool:
        """Return True if ``path`` is waiting to be regenerated."""
        return bool(self._redis.sismember(self._key, path))

    def consume(self, path: str) -> bool:
        """Clear the stale flag for ``path``; True if it was set."""
        return bool(self._redis.srem(self._key, path))

    def stale_paths(self) -> set[str]:
        """Return every path currently flagged."""
        members = self._redis.smembers(self._key)
        return {m.decode() if isinstance(m, bytes) else str(m) for m in members}


@lru_cache(maxsize=1)
def get_revalidation_service() -> RevalidationService:
    """Return the process-wide revalidation service."""
    client = redis.from_url(settings.redis_url)  # type: ignore[no-untyped-call]
    return RevalidationService(client)
