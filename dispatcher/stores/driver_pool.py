# dispatcher/stores/driver_pool.py
"""Availability-ordered driver pool"""
import heapq
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Set, Tuple

from dispatcher.errors import DriverNotFoundError, NoDriversAvailableError, RosterError
from dispatcher.models import Driver
from dispatcher.utils import get_logger

logger = get_logger("driver_pool")

# (next_available_at, roster position, driver_id)
HeapEntry = Tuple[datetime, int, str]


class DriverPool:
    """Fixed roster of drivers plus a min-heap keyed on availability.

    The roster is authoritative. The heap holds a copy of each driver's
    availability time, so any change made outside the extract/reinsert
    cycle must go through update_availability, which resyncs the heap from
    the roster. Ties on availability go to the driver listed first.

    A driver is never removed from the roster. Between extract_earliest and
    reinsert it is only missing from the heap.
    """

    def __init__(self, drivers: Iterable[Driver]):
        # The pool keeps its own records; the given drivers are only read
        self._roster: Dict[str, Driver] = {}
        self._rank: Dict[str, int] = {}
        for driver in drivers:
            if not isinstance(driver.driver_id, str) or not driver.driver_id:
                raise RosterError(f"Invalid driver id: {driver.driver_id!r}")
            if driver.driver_id in self._roster:
                raise RosterError(f"Duplicate driver id: {driver.driver_id}")
            self._rank[driver.driver_id] = len(self._roster)
            self._roster[driver.driver_id] = driver.copy()

        self._heap: List[HeapEntry] = []
        self._in_heap: Set[str] = set()
        for driver_id in self._roster:
            self._in_heap.add(driver_id)
        self._rebuild()

    # -------------------- ordered structure --------------------

    def extract_earliest(self) -> Driver:
        """Remove and return the driver with the smallest next_available_at"""
        if not self._heap:
            raise NoDriversAvailableError()
        _, _, driver_id = heapq.heappop(self._heap)
        self._in_heap.discard(driver_id)
        return self._roster[driver_id]

    def reinsert(self, driver: Driver) -> None:
        """Put a driver back into the heap with its current availability.

        The roster record takes the given driver's time, so passing a detached
        copy leaves both views in agreement.
        """
        record = self._require(driver.driver_id)
        record.next_available_at = driver.next_available_at
        if driver.driver_id in self._in_heap:
            # Already queued: its stored key may be stale
            self._rebuild()
            return
        heapq.heappush(self._heap, self._entry(record))
        self._in_heap.add(driver.driver_id)

    def update_availability(self, driver_id: str, new_time: datetime) -> Driver:
        """Change a driver's availability and resync the heap from the roster"""
        record = self._require(driver_id)
        record.next_available_at = new_time
        if driver_id in self._in_heap:
            self._rebuild()
        return record

    def peek_earliest(self) -> Optional[Driver]:
        if not self._heap:
            return None
        return self._roster[self._heap[0][2]]

    def _entry(self, driver: Driver) -> HeapEntry:
        return (driver.next_available_at, self._rank[driver.driver_id], driver.driver_id)

    def _rebuild(self) -> None:
        # O(n) resync; fine for a roster of this size
        self._heap = [self._entry(self._roster[d]) for d in self._roster if d in self._in_heap]
        heapq.heapify(self._heap)
        logger.debug("Driver heap rebuilt with %d entries", len(self._heap))

    # -------------------- roster --------------------

    def get(self, driver_id: str) -> Optional[Driver]:
        return self._roster.get(driver_id)

    def _require(self, driver_id: str) -> Driver:
        driver = self._roster.get(driver_id)
        if driver is None:
            raise DriverNotFoundError(driver_id)
        return driver

    def snapshot(self) -> List[Driver]:
        """Detached copies of every driver, in roster order"""
        return [d.copy() for d in self._roster.values()]

    def heap_view(self) -> Dict[str, datetime]:
        """Availability times as currently stored in the heap"""
        return {driver_id: at for at, _, driver_id in self._heap}

    def is_consistent(self) -> bool:
        """True when every heap entry matches its roster record"""
        view = self.heap_view()
        if set(view) != self._in_heap or len(view) != len(self._heap):
            return False
        return all(self._roster[d].next_available_at == at for d, at in view.items())

    @property
    def roster_size(self) -> int:
        return len(self._roster)

    def is_empty(self) -> bool:
        return not self._heap

    def __len__(self) -> int:
        return len(self._heap)

    def __contains__(self, driver_id: str) -> bool:
        return driver_id in self._roster
