import threading
from datetime import datetime, timezone
from typing import Iterable, Optional, Tuple

from sitestatus.status_check.models import Site


class SiteStore:
    """
    Holds the current sites behind a single lock.

    The sequence is swapped wholesale on replace(), so a reader sees either the
    previous snapshot or the new one, never a mix. The lock only covers the
    swap and the copy; callers must not hold it across network I/O.
    """

    def __init__(self, sites: Iterable[Site] = ()):
        self._lock = threading.Lock()
        self._sites: Tuple[Site, ...] = tuple(sites)
        self._updated_at: Optional[datetime] = None

    def read(self) -> Tuple[Site, ...]:
        with self._lock:
            return self._sites

    def replace(self, sites: Iterable[Site]) -> None:
        new_sites = tuple(sites)
        with self._lock:
            self._sites = new_sites
            self._updated_at = datetime.now(timezone.utc)

    def snapshot(self) -> Tuple[Tuple[Site, ...], Optional[datetime]]:
        """Sites and the time they were stored, read under one lock acquisition."""
        with self._lock:
            return self._sites, self._updated_at

    @property
    def updated_at(self) -> Optional[datetime]:
        with self._lock:
            return self._updated_at

    def __len__(self) -> int:
        return len(self.read())
