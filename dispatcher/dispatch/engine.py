# dispatcher/dispatch/engine.py
"""Main dispatch engine"""
import threading
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, Iterable, List, NamedTuple, Optional

from dispatcher.analysis import SummaryBuilder
from dispatcher.config import COMPLETED_PREVIEW_LIMIT, DELIVERY_DURATION, DRIVERS_FILE
from dispatcher.errors import (
    AlreadyCompletedError,
    DispatchError,
    DriverNotFoundError,
    NoDriversAvailableError,
    NoPendingOrdersError,
    NotYetAssignedError,
)
from dispatcher.io import RosterLoader
from dispatcher.models import Driver, Order, OrderStatus
from dispatcher.stores import DriverPool, OrderQueue, OrderStore
from dispatcher.utils import get_logger

logger = get_logger("engine")

Clock = Callable[[], datetime]


class Assignment(NamedTuple):
    """Result of dispatching one order"""
    order: Order
    driver: Driver
    delivery_time: datetime


class DispatchEngine:
    """Couples the order queue, the order store and the driver pool.

    Every public method runs under one re-entrant lock, so each operation is
    applied as a unit: either the whole transition happens or, when an error
    is raised, nothing changed. Returned orders and drivers are detached
    copies.
    """

    def __init__(self, drivers: Iterable[Driver],
                 delivery_duration: timedelta = DELIVERY_DURATION,
                 clock: Clock = datetime.now,
                 completed_limit: int = COMPLETED_PREVIEW_LIMIT):
        self.delivery_duration = delivery_duration
        self.completed_limit = completed_limit
        self._clock = clock
        self._lock = threading.RLock()

        self.orders = OrderStore()
        self.queue = OrderQueue()
        self.pool = DriverPool(drivers)

        logger.info("System initialized with %d drivers", self.pool.roster_size)

    @classmethod
    def from_config(cls, drivers_file: str = DRIVERS_FILE, clock: Clock = datetime.now,
                    **kwargs) -> 'DispatchEngine':
        """Build an engine from the configured roster file (or default names)"""
        drivers = RosterLoader.load_or_default(drivers_file, available_at=clock())
        return cls(drivers, clock=clock, **kwargs)

    def now(self) -> datetime:
        return self._clock()

    # -------------------- state-changing operations --------------------

    def place_order(self, address: str, items: Iterable[str]) -> Order:
        """Create a pending order and put it at the back of the queue"""
        with self._lock:
            order = self.orders.create(address, items, created_at=self.now())
            self.queue.enqueue(order.order_id)
            logger.info("Order %s placed (%d items) for %s",
                        order.order_id, order.item_count, address,
                        extra={"order_id": order.order_id})
            return order.copy()

    def assign_driver(self) -> Assignment:
        """Dispatch the oldest pending order to the earliest-available driver.

        Extraction is unconditional: the driver with the smallest availability
        time is used even if that time is still in the future.
        """
        with self._lock:
            if self.queue.is_empty():
                logger.warning("Assignment rejected: no pending orders")
                raise NoPendingOrdersError()
            if self.pool.is_empty():
                logger.warning("Assignment rejected: no drivers in pool")
                raise NoDriversAvailableError()

            order_id = self.queue.dequeue()
            driver = self.pool.extract_earliest()

            delivery_time = self.now() + self.delivery_duration
            self.orders.set_status(order_id, OrderStatus.ACTIVE)
            order = self.orders.set_assigned_driver(order_id, driver.driver_id)

            driver.next_available_at = delivery_time
            self.pool.reinsert(driver)

            logger.info("Order %s assigned to %s (%s), delivery due %s",
                        order_id, driver.name, driver.driver_id, delivery_time.isoformat(),
                        extra={"order_id": order_id, "driver_id": driver.driver_id})
            return Assignment(order.copy(), driver.copy(), delivery_time)

    def complete_delivery(self, order_id: str) -> Order:
        """Mark an active order completed and free its driver immediately"""
        with self._lock:
            try:
                order = self.orders.get(order_id)
                if order.is_completed:
                    raise AlreadyCompletedError(order_id)
                if order.is_pending:
                    raise NotYetAssignedError(order_id)
                if order.assigned_driver_id not in self.pool:
                    raise DriverNotFoundError(order.assigned_driver_id)
            except DispatchError as e:
                if e.informational:
                    logger.info(e.message, extra={"order_id": order_id})
                else:
                    logger.warning("Completion rejected: %s", e.message, extra={"order_id": order_id})
                raise

            now = self.now()
            self.orders.set_status(order_id, OrderStatus.COMPLETED, at=now)
            driver = self.pool.update_availability(order.assigned_driver_id, now)

            logger.info("Order %s delivered, driver %s (%s) is now available",
                        order_id, driver.name, driver.driver_id,
                        extra={"order_id": order_id, "driver_id": driver.driver_id})
            return order.copy()

    # -------------------- read operations --------------------

    def track_order(self, order_id: str) -> Dict[str, Any]:
        """Order fields, plus the driver's name and availability while active"""
        with self._lock:
            order = self.orders.get(order_id)
            view = order.to_dict()
            view['driver'] = None
            if order.is_active:
                driver = self.pool.get(order.assigned_driver_id)
                if driver is not None:
                    view['driver'] = driver.to_dict()
            return view

    def summarize(self) -> Dict[str, Any]:
        with self._lock:
            return SummaryBuilder.build(
                pending=self._pending_orders(),
                active=self.orders.all_active(),
                completed=self.orders.all_completed(),
                drivers=self.pool.snapshot(),
                counts=self.orders.count_by_status(),
                now=self.now(),
                completed_limit=self.completed_limit,
            )

    def pending_queue_snapshot(self) -> List[Dict[str, Any]]:
        """Pending orders front to back"""
        with self._lock:
            return [SummaryBuilder.pending_entry(o) for o in self._pending_orders()]

    def pending_count(self) -> int:
        with self._lock:
            return self.queue.size()

    def get_driver(self, driver_id: str) -> Optional[Driver]:
        with self._lock:
            driver = self.pool.get(driver_id)
            return driver.copy() if driver is not None else None

    def drivers(self) -> List[Driver]:
        with self._lock:
            return self.pool.snapshot()

    def _pending_orders(self) -> List[Order]:
        return [self.orders.get(oid) for oid in self.queue.peek_all()]
