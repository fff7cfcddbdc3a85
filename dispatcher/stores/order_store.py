# dispatcher/stores/order_store.py
"""Order registry"""
import itertools
from collections import Counter
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from dispatcher.config import ORDER_ID_PREFIX
from dispatcher.errors import OrderNotFoundError
from dispatcher.models import Order, OrderStatus


class OrderStore:
    """Owns every order ever created, keyed by order id.

    Records are never deleted. Completed orders stay in the store and are
    additionally remembered in completion order. Transition rules are the
    caller's business; this class only applies them.
    """

    def __init__(self, id_prefix: str = ORDER_ID_PREFIX):
        self.id_prefix = id_prefix
        self._orders: Dict[str, Order] = {}
        self._completed_ids: List[str] = []
        self._counter = itertools.count(1)

    def create(self, address: str, items: Iterable[str], created_at: datetime) -> Order:
        """Register a new pending order under a fresh id"""
        order_id = f"{self.id_prefix}{next(self._counter)}"
        order = Order(order_id, address, items, created_at)
        self._orders[order_id] = order
        return order

    def get(self, order_id: str) -> Order:
        try:
            return self._orders[order_id]
        except KeyError:
            raise OrderNotFoundError(order_id) from None

    def set_status(self, order_id: str, status: OrderStatus,
                   at: Optional[datetime] = None) -> Order:
        order = self.get(order_id)
        order.status = status
        if status is OrderStatus.COMPLETED:
            order.completed_at = at
            self._completed_ids.append(order_id)
        return order

    def set_assigned_driver(self, order_id: str, driver_id: str) -> Order:
        order = self.get(order_id)
        order.assigned_driver_id = driver_id
        return order

    def all_completed(self) -> List[Order]:
        """Completed orders, oldest completion first"""
        return [self._orders[oid] for oid in self._completed_ids]

    def all_active(self) -> List[Order]:
        """Active orders in creation order"""
        return [o for o in self._orders.values() if o.is_active]

    def count_by_status(self) -> Dict[OrderStatus, int]:
        counts = Counter(o.status for o in self._orders.values())
        return {status: counts.get(status, 0) for status in OrderStatus}

    def __contains__(self, order_id: str) -> bool:
        return order_id in self._orders

    def __len__(self) -> int:
        return len(self._orders)
