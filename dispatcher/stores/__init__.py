"""State owned by the dispatcher: orders, the pending queue and the driver pool"""

from .order_store import OrderStore
from .order_queue import OrderQueue
from .driver_pool import DriverPool

__all__ = ['OrderStore', 'OrderQueue', 'DriverPool']
