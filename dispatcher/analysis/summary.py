# dispatcher/analysis/summary.py
"""Summary aggregation"""
from datetime import datetime
from typing import Dict, Any, List

from dispatcher.config import COMPLETED_PREVIEW_LIMIT
from dispatcher.models import Driver, Order, OrderStatus


class SummaryBuilder:
    """Builds the read-only dispatch summary"""

    @staticmethod
    def build(pending: List[Order], active: List[Order], completed: List[Order],
              drivers: List[Driver], counts: Dict[OrderStatus, int], now: datetime,
              completed_limit: int = COMPLETED_PREVIEW_LIMIT) -> Dict[str, Any]:
        """Aggregate queue, order and driver state into one dictionary.

        `completed` must be in completion order; the preview lists the most
        recent ones first.
        """
        recent = list(reversed(completed[-completed_limit:])) if completed_limit > 0 else []

        return {
            'generated_at': now,
            'totals': {status.value: counts.get(status, 0) for status in OrderStatus},
            'pending': {
                'count': len(pending),
                'orders': [SummaryBuilder.pending_entry(o) for o in pending],
            },
            'active': {
                'count': len(active),
                'orders': [
                    {
                        'order_id': o.order_id,
                        'driver_id': o.assigned_driver_id,
                        'delivery_address': o.delivery_address,
                    }
                    for o in active
                ],
            },
            'completed': {
                'count': len(completed),
                'recent': [
                    {
                        'order_id': o.order_id,
                        'delivery_address': o.delivery_address,
                        'item_count': o.item_count,
                        'driver_id': o.assigned_driver_id,
                        'completed_at': o.completed_at,
                    }
                    for o in recent
                ],
                'remaining': len(completed) - len(recent),
            },
            'drivers': [SummaryBuilder.driver_status(d, now) for d in drivers],
        }

    @staticmethod
    def pending_entry(order: Order) -> Dict[str, Any]:
        return {
            'order_id': order.order_id,
            'delivery_address': order.delivery_address,
            'items': list(order.items),
            'item_count': order.item_count,
            'created_at': order.created_at,
        }

    @staticmethod
    def driver_status(driver: Driver, now: datetime) -> Dict[str, Any]:
        available = driver.is_available(now)
        return {
            'driver_id': driver.driver_id,
            'name': driver.name,
            'available': available,
            'busy_until': None if available else driver.next_available_at,
            'next_available_at': driver.next_available_at,
        }
