"""
In-memory record store - ordered, insertion-order list of records for one domain.
"""

from typing import Generic, List, Tuple, TypeVar

from .errors import NotFound
from .schema import Record

R = TypeVar("R", bound=Record)


class RecordStore(Generic[R]):
    """Ordered collection of records addressed by position or id.

    The store does not notify anyone when it changes. Callers refresh their
    views after a mutating call, and must treat any index they hold as stale
    once an insertion or deletion has happened.
    """

    def __init__(self):
        self._records: List[R] = []
        self._ids = set()

    def add(self, record: R) -> str:
        """Append a record and return its id."""
        if record.id in self._ids:
            raise ValueError(f"Duplicate record id: {record.id}")
        self._records.append(record)
        self._ids.add(record.id)
        return record.id

    def get(self, index: int) -> R:
        """Get the record at a position."""
        if not self._in_bounds(index):
            raise NotFound(index)
        return self._records[index]

    def remove_at(self, index: int) -> R:
        """Remove and return the record at a position."""
        if not self._in_bounds(index):
            raise NotFound(index)
        record = self._records.pop(index)
        self._ids.discard(record.id)
        return record

    def index_of(self, record_id: str) -> int:
        """Current position of a record id."""
        for index, record in enumerate(self._records):
            if record.id == record_id:
                return index
        raise NotFound(record_id)

    def remove(self, record_id: str) -> R:
        """Remove and return a record by id."""
        return self.remove_at(self.index_of(record_id))

    def all(self) -> Tuple[R, ...]:
        """Snapshot of all records in insertion order."""
        return tuple(self._records)

    def __contains__(self, record_id: str) -> bool:
        return record_id in self._ids

    def __len__(self) -> int:
        return len(self._records)

    def _in_bounds(self, index: int) -> bool:
        # Negative indices are rejected rather than counted from the end
        return isinstance(index, int) and 0 <= index < len(self._records)
