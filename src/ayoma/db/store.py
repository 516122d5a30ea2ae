"""Load and persist named collections of records.

A collection is a list of JSON-compatible dictionaries. Stores never merge or
patch: ``persist`` always replaces the whole collection. Callers that mutate
data go through :meth:`RecordStore.transaction`, which holds the
per-collection locks for the entire load-mutate-persist cycle so related
records (both sides of a follow, a post and its author's counter) are always
written together.
"""

from __future__ import annotations

import copy
import json
import logging
import os
import threading
from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator, Sequence
from contextlib import ExitStack, contextmanager
from pathlib import Path
from typing import Any

from ayoma.core.errors import StorageError

__all__ = ["Record", "RecordStore", "TransactionRecords", "JsonRecordStore", "MemoryRecordStore"]

Record = dict[str, Any]

logger = logging.getLogger(__name__)


class TransactionRecords(dict[str, list[Record]]):
    """Collections loaded by :meth:`RecordStore.transaction`, keyed by name.

    ``failed_writes`` lists the written collections whose persist failed. It
    is filled in when the block exits, so check it after the ``with``.
    """

    def __init__(self, collections: dict[str, list[Record]]) -> None:
        super().__init__(collections)
        self.failed_writes: list[str] = []

    @property
    def persisted(self) -> bool:
        return not self.failed_writes


class RecordStore(ABC):
    """Abstract durable storage for named collections."""

    def __init__(self) -> None:
        self._locks: dict[str, threading.RLock] = {}
        self._locks_guard = threading.Lock()

    @abstractmethod
    def load(self, collection: str) -> list[Record]:
        """Return a private copy of every record in ``collection``.

        A collection that does not exist yet loads as an empty list.
        """

    @abstractmethod
    def persist(self, collection: str, records: Sequence[Record]) -> bool:
        """Replace ``collection`` with ``records``.

        Returns:
            True when the records reached durable storage. False means the
            write failed and was logged; the in-process copy still holds the
            new records.
        """

    def lock(self, collection: str) -> threading.RLock:
        """Return the re-entrant lock guarding ``collection``."""
        with self._locks_guard:
            return self._locks.setdefault(collection, threading.RLock())

    def read(self, collection: str) -> list[Record]:
        """Load ``collection`` while holding its lock."""
        with self.lock(collection):
            return self.load(collection)

    @contextmanager
    def transaction(
        self,
        *writes: str,
        reads: Iterable[str] = (),
    ) -> Iterator[TransactionRecords]:
        """Lock, load and yield collections, then persist the written ones.

        Locks are taken in sorted name order whatever the argument order, so
        two transactions over the same collections can never deadlock. When
        the block raises, nothing is persisted. A failed persist does not
        raise; its collection is added to ``failed_writes``.

        Args:
            *writes: Collections that are mutated and persisted on success.
            reads: Collections that are only read.

        Yields:
            Mapping of collection name to its mutable list of records.
        """
        names = sorted(set(writes) | set(reads))
        with ExitStack() as stack:
            for name in names:
                stack.enter_context(self.lock(name))
            collections = TransactionRecords({name: self.load(name) for name in names})
            yield collections
            for name in writes:
                if not self.persist(name, collections[name]):
                    collections.failed_writes.append(name)


class JsonRecordStore(RecordStore):
    """Collections stored as ``<data_dir>/<collection>.json`` documents.

    Loaded collections stay cached for the lifetime of the process. A failed
    write still updates the cache, so memory and disk can diverge until the
    next successful persist.
    """

    def __init__(self, data_dir: Path | str) -> None:
        super().__init__()
        self.data_dir = Path(data_dir)
        self._cache: dict[str, list[Record]] = {}

    def path_for(self, collection: str) -> Path:
        return self.data_dir / f"{collection}.json"

    def load(self, collection: str) -> list[Record]:
        if collection not in self._cache:
            try:
                self._cache[collection] = self._read(collection)
            except StorageError as exc:
                logger.error("%s", exc.message)
                return []
        return copy.deepcopy(self._cache[collection])

    def _read(self, collection: str) -> list[Record]:
        path = self.path_for(collection)
        try:
            if not path.exists():
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_text("[]", encoding="utf-8")
                logger.info("Initialized empty collection %s at %s", collection, path)
                return []
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise StorageError(f"Failed to read collection {collection} from {path}: {exc}") from exc

        if not isinstance(data, list):
            raise StorageError(f"Collection {collection} at {path} is not a JSON array")
        return data

    def persist(self, collection: str, records: Sequence[Record]) -> bool:
        snapshot = copy.deepcopy(list(records))
        self._cache[collection] = snapshot

        path = self.path_for(collection)
        tmp_path = path.with_name(f"{path.name}.tmp")
        try:
            payload = json.dumps(snapshot, indent=2, ensure_ascii=False)
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(payload, encoding="utf-8")
            os.replace(tmp_path, path)
        except (OSError, TypeError, ValueError) as exc:
            logger.warning(
                "Failed to persist collection %s to %s, memory and disk now differ: %s",
                collection,
                path,
                exc,
            )
            return False
        return True


class MemoryRecordStore(RecordStore):
    """Process-local store used by tests and ephemeral deployments."""

    def __init__(self, initial: dict[str, list[Record]] | None = None) -> None:
        super().__init__()
        self._collections: dict[str, list[Record]] = copy.deepcopy(initial or {})

    def load(self, collection: str) -> list[Record]:
        return copy.deepcopy(self._collections.get(collection, []))

    def persist(self, collection: str, records: Sequence[Record]) -> bool:
        self._collections[collection] = copy.deepcopy(list(records))
        return True
