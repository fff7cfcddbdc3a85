"""Data models for drivers and orders"""

from .driver import Driver
from .order import Order, OrderStatus

__all__ = ['Driver', 'Order', 'OrderStatus']
