# dispatcher/models/order.py
"""Order model"""
import copy
from datetime import datetime
from enum import Enum
from typing import Dict, Any, Iterable, Optional, Tuple

from dispatcher.utils import to_iso


class OrderStatus(str, Enum):
    """Lifecycle of an order: pending -> active -> completed"""
    PENDING = 'pending'
    ACTIVE = 'active'
    COMPLETED = 'completed'


class Order:
    """Represents a customer delivery order"""

    def __init__(self, order_id: str, delivery_address: str, items: Iterable[str],
                 created_at: datetime):
        self.order_id: str = order_id
        self.delivery_address: str = delivery_address
        self.items: Tuple[str, ...] = tuple(items)
        self.created_at: datetime = created_at
        self.status: OrderStatus = OrderStatus.PENDING
        self.assigned_driver_id: Optional[str] = None
        self.completed_at: Optional[datetime] = None

    @property
    def item_count(self) -> int:
        return len(self.items)

    @property
    def is_pending(self) -> bool:
        return self.status is OrderStatus.PENDING

    @property
    def is_active(self) -> bool:
        return self.status is OrderStatus.ACTIVE

    @property
    def is_completed(self) -> bool:
        return self.status is OrderStatus.COMPLETED

    def copy(self) -> 'Order':
        """Detached copy handed out to callers"""
        return copy.copy(self)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            'order_id': self.order_id,
            'delivery_address': self.delivery_address,
            'items': list(self.items),
            'item_count': self.item_count,
            'status': self.status.value,
            'assigned_driver_id': self.assigned_driver_id,
            'created_at': to_iso(self.created_at),
            'completed_at': to_iso(self.completed_at),
        }

    def __repr__(self) -> str:
        return f"Order({self.order_id}, {self.status.value}, {self.delivery_address})"
