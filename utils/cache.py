"""
In-process cache of rendered list pages, keyed by path, query and caller.

A successful create/update/delete calls ``invalidate`` for the entity's
list path so the next list request re-queries. Only the query keys the list
page actually reads go into the key, and the cache never holds more than
``max_entries`` pages.
"""
import logging
import time
from collections import OrderedDict
from threading import Lock

from flask import current_app

logger = logging.getLogger(__name__)


class ListViewCache:
    def __init__(self, ttl=60, enabled=True, max_entries=1000):
        self.ttl = ttl
        self.enabled = enabled
        self.max_entries = max_entries
        # insertion order == expiry order, every entry gets the same ttl
        self._entries = OrderedDict()
        self._lock = Lock()

    @staticmethod
    def make_key(path, params, ctx, keys=None):
        """``keys`` limits which query-string keys take part in the key"""
        query = tuple(sorted(
            (k, v) for k, v in params.items()
            if keys is None or k in keys
        ))
        return (path, query, ctx.user_id, ctx.role)

    def get(self, key):
        if not self.enabled:
            return None
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at, value = entry
            if expires_at < time.monotonic():
                del self._entries[key]
                return None
            return value

    def set(self, key, value):
        if not self.enabled:
            return
        with self._lock:
            now = time.monotonic()
            self._purge_expired(now)
            self._entries.pop(key, None)
            while len(self._entries) >= self.max_entries:
                self._entries.popitem(last=False)
            self._entries[key] = (now + self.ttl, value)

    def _purge_expired(self, now):
        while self._entries:
            oldest_key = next(iter(self._entries))
            if self._entries[oldest_key][0] >= now:
                break
            del self._entries[oldest_key]

    def invalidate(self, path):
        """Drop every cached page under ``path`` (all queries, all callers)"""
        with self._lock:
            stale = [key for key in self._entries if key[0] == path or key[0].startswith(path + '/')]
            for key in stale:
                del self._entries[key]
        if stale:
            logger.debug("Invalidated %d cached list page(s) under %s", len(stale), path)

    def clear(self):
        with self._lock:
            self._entries.clear()

    def __len__(self):
        return len(self._entries)


def get_list_cache():
    return current_app.extensions['list_cache']
