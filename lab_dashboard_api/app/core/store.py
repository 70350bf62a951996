"""
In-memory entity store.

An :class:`EntityStore` is the repository for one entity kind
(laboratories, machines, clients, activities...).  Records are plain
dicts keyed by their camelCase wire names and kept in an ordered list;
lookups are linear scans, which is adequate for the collection sizes a
single laboratory dashboard handles.

Ownership between kinds is declared with :meth:`EntityStore.add_child`:
deleting a parent record removes every child whose ``parent_field``
equals the parent id, recursively (laboratory → machines → records).
Back-references that are not registered as children are plain lookup
fields and are never checked for existence.

Each store guards its list with a re-entrant lock so every public
operation is atomic with respect to other operations on the same store.
There is no transaction spanning several stores.  Records handed out by
the store are deep copies; mutating them does not change stored state.
"""

from __future__ import annotations

import copy
import logging
import threading
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from .seed import parse_timestamp

Record = Dict[str, Any]
Predicate = Callable[[Record], bool]

logger = logging.getLogger(__name__)
_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


class EntityStore:
    """Ordered, lock-protected collection of records of one kind.

    Parameters
    ----------
    kind : str
        Human-readable collection name used in log messages.
    prefix : str
        Prefix of generated ids (``"lab"`` → ``"lab-3f2a..."``).
    retention : Optional[int]
        Maximum number of records kept; the oldest inserts are evicted
        first when a create pushes the collection over the bound.
    newest_first : bool
        Insert new records at the front instead of appending.
    order_by : Optional[str]
        When set, :meth:`list` returns records sorted by this timestamp field in
        descending order (ties keep storage order).
    """

    def __init__(
        self,
        kind: str,
        prefix: str,
        *,
        retention: Optional[int] = None,
        newest_first: bool = False,
        order_by: Optional[str] = None,
    ) -> None:
        self.kind = kind
        self.prefix = prefix
        self.retention = retention
        self.newest_first = newest_first
        self.order_by = order_by
        self._records: List[Record] = []
        self._children: List[Tuple["EntityStore", str]] = []
        self._lock = threading.RLock()

    def __len__(self) -> int:
        return self.count()

    def __repr__(self) -> str:
        return f"EntityStore(kind={self.kind!r}, records={len(self._records)})"

    # ------------------------------------------------------------------
    # Wiring
    # ------------------------------------------------------------------
    def add_child(self, store: "EntityStore", parent_field: str) -> None:
        """Declare that ``store`` records are owned through ``parent_field``."""
        self._children.append((store, parent_field))

    def new_id(self) -> str:
        return f"{self.prefix}-{uuid.uuid4().hex}"

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def list(self, predicate: Optional[Predicate] = None, **equals: Any) -> List[Record]:
        """Return copies of the records matching every filter.

        ``equals`` holds field/value equality filters; a value of
        ``None`` means "no filter" for that field so query parameters can
        be forwarded unchanged.  ``predicate`` is an additional arbitrary
        test.
        """
        filters = {name: value for name, value in equals.items() if value is not None}
        with self._lock:
            matched = [
                record
                for record in self._records
                if all(record.get(name) == value for name, value in filters.items())
                and (predicate is None or predicate(record))
            ]
            result = copy.deepcopy(matched)
        if self.order_by:
            key = self.order_by
            result.sort(key=lambda record: parse_timestamp(record.get(key)) or _OLDEST, reverse=True)
        return result

    def get(self, record_id: str) -> Optional[Record]:
        with self._lock:
            index = self._index_of(record_id)
            if index is None:
                return None
            return copy.deepcopy(self._records[index])

    def exists(self, record_id: str) -> bool:
        with self._lock:
            return self._index_of(record_id) is not None

    def count(self, predicate: Optional[Predicate] = None) -> int:
        with self._lock:
            if predicate is None:
                return len(self._records)
            return sum(1 for record in self._records if predicate(record))

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def create(self, fields: Record, **extra: Any) -> Record:
        """Store a new record built from validated ``fields``.

        A fresh id is assigned unless ``extra`` carries an explicit
        ``id`` (used when loading seed data).  ``extra`` also carries
        creation-derived fields such as timestamps; it wins over
        ``fields`` for any shared key.
        """
        record: Record = {"id": extra.pop("id", None) or self.new_id()}
        record.update(copy.deepcopy(fields))
        record.update(extra)
        with self._lock:
            if self.newest_first:
                self._records.insert(0, record)
            else:
                self._records.append(record)
            evicted = self._enforce_retention()
            stored = copy.deepcopy(record)
        if evicted:
            logger.debug("%s: evicted %d record(s) over retention %s", self.kind, evicted, self.retention)
        return stored

    def update(self, record_id: str, fields: Record) -> Optional[Record]:
        """Merge ``fields`` into the record in place; the id never changes."""
        changes = {key: value for key, value in copy.deepcopy(fields).items() if key != "id"}
        with self._lock:
            index = self._index_of(record_id)
            if index is None:
                return None
            self._records[index].update(changes)
            return copy.deepcopy(self._records[index])

    def delete(self, record_id: str) -> bool:
        """Remove a record and cascade to owned children.

        Returns ``False`` when no record has ``record_id``; calling it
        twice is harmless.
        """
        with self._lock:
            index = self._index_of(record_id)
            if index is None:
                return False
            del self._records[index]
        self._cascade([record_id])
        return True

    def delete_where(self, predicate: Predicate) -> int:
        """Remove every record matching ``predicate``; returns the count."""
        with self._lock:
            removed_ids = [record["id"] for record in self._records if predicate(record)]
            if removed_ids:
                removed = set(removed_ids)
                self._records = [record for record in self._records if record["id"] not in removed]
        self._cascade(removed_ids)
        return len(removed_ids)

    def clear(self) -> None:
        with self._lock:
            removed_ids = [record["id"] for record in self._records]
            self._records = []
        self._cascade(removed_ids)

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------
    def load(self, records: Iterable[Record]) -> None:
        """Replace the whole collection with ``records`` (no cascade)."""
        loaded = [copy.deepcopy(record) for record in records]
        for record in loaded:
            record.setdefault("id", self.new_id())
        with self._lock:
            self._records = loaded

    def dump(self) -> List[Record]:
        """Return a copy of every record in storage order."""
        with self._lock:
            return copy.deepcopy(self._records)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _index_of(self, record_id: str) -> Optional[int]:
        for index, record in enumerate(self._records):
            if record.get("id") == record_id:
                return index
        return None

    def _enforce_retention(self) -> int:
        if self.retention is None or len(self._records) <= self.retention:
            return 0
        overflow = len(self._records) - self.retention
        if self.newest_first:
            del self._records[self.retention:]
        else:
            del self._records[:overflow]
        return overflow

    def _cascade(self, parent_ids: List[str]) -> None:
        if not parent_ids:
            return
        parents = set(parent_ids)
        for child_store, parent_field in self._children:
            removed = child_store.delete_where(lambda record: record.get(parent_field) in parents)
            if removed:
                logger.debug("%s: cascaded delete of %d %s record(s)", self.kind, removed, child_store.kind)
