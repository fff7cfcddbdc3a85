"""Food delivery dispatch engine"""

from dispatcher.dispatch import Assignment, DispatchEngine
from dispatcher.models import Driver, Order, OrderStatus

__all__ = ['Assignment', 'DispatchEngine', 'Driver', 'Order', 'OrderStatus']
