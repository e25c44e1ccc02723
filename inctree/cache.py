"""Process-lifetime store of per-file dependency results."""

import logging
from collections.abc import Iterator

from inctree.models import DependencyRecord

logger = logging.getLogger(__name__)


class DependencyCache:
    """Write-once map from canonical path to DependencyRecord.

    One instance is shared by every traversal of a run. A record is installed
    at most once; later inserts for the same path are ignored.
    """

    def __init__(self):
        self._records: dict[str, DependencyRecord] = {}
        self.hits = 0
        self.misses = 0

    def lookup(self, path: str) -> DependencyRecord | None:
        record = self._records.get(path)
        if record is None:
            self.misses += 1
        else:
            self.hits += 1
        return record

    def insert_if_absent(self, path: str, record: DependencyRecord) -> bool:
        """Store `record` for `path` unless one exists. Returns True if stored."""
        if path in self._records:
            logger.debug(f"Keeping existing record for {path}")
            return False
        self._records[path] = record
        return True

    def records(self) -> Iterator[tuple[str, DependencyRecord]]:
        return iter(self._records.items())

    def __contains__(self, path: str) -> bool:
        return path in self._records

    def __len__(self) -> int:
        return len(self._records)
