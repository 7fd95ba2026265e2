"""
In-memory cache with TTL
Entries expire lazily on read, and expired entries are swept on write
"""
import threading
from datetime import datetime, timedelta
from typing import Callable, Dict, Optional, Tuple

from feedback_service.core.logging import get_logger

log = get_logger("cache.memory")


class MemoryCache:
    """Thread-safe in-memory key/bytes cache"""

    def __init__(self, ttl_seconds: int = 60, clock: Callable[[], datetime] = datetime.utcnow):
        self.entries: Dict[str, Tuple[bytes, datetime]] = {}
        self.ttl = timedelta(seconds=ttl_seconds)
        self.clock = clock
        self.lock = threading.Lock()

    async def get(self, key: str) -> Optional[bytes]:
        with self.lock:
            entry = self.entries.get(key)
            if not entry:
                log.debug(f"Cache miss key={key}")
                return None

            value, expires_at = entry
            if self.clock() >= expires_at:
                del self.entries[key]
                log.debug(f"Cache expired key={key}")
                return None

            return value

    async def set(self, key: str, value: bytes) -> None:
        with self.lock:
            now = self.clock()
            # keys that are never read again only leave here
            expired = [k for k, (_, expires_at) in self.entries.items() if now >= expires_at]
            for k in expired:
                del self.entries[k]
            self.entries[key] = (value, now + self.ttl)
        log.debug(f"Cache set key={key} size={len(value)}")

    def clear_all(self) -> int:
        """
        Clear all cached data
        Returns number of entries removed
        """
        with self.lock:
            count = len(self.entries)
            self.entries.clear()
            return count

    async def close(self) -> None:
        self.clear_all()
