"""Process-wide record store used as a FastAPI dependency."""

from __future__ import annotations

from functools import lru_cache

from ayoma.core.settings import settings
from ayoma.db.store import JsonRecordStore, RecordStore

USERS = "users"
POSTS = "posts"


@lru_cache(maxsize=1)
def get_store() -> RecordStore:
    """Return the shared JSON store rooted at ``settings.data_dir``."""
    return JsonRecordStore(settings.data_dir)
