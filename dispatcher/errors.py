# dispatcher/errors.py
"""Exceptions raised by the dispatch core.

Every error is raised before any state is touched, so catching one means
nothing changed. Callers translate them into messages or HTTP responses.
"""
from typing import Optional


class DispatchError(Exception):
    """Base class for all dispatch errors"""

    code = 'dispatch_error'
    informational = False

    def __init__(self, message: str, order_id: Optional[str] = None,
                 driver_id: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.order_id = order_id
        self.driver_id = driver_id

    def to_dict(self):
        payload = {'error': self.code, 'detail': self.message}
        if self.order_id is not None:
            payload['order_id'] = self.order_id
        if self.driver_id is not None:
            payload['driver_id'] = self.driver_id
        return payload


class OrderNotFoundError(DispatchError):
    """Raised when an order id is unknown."""
    code = 'not_found'

    def __init__(self, order_id: str):
        super().__init__(f"Order not found: {order_id}", order_id=order_id)


class NoPendingOrdersError(DispatchError):
    """Raised when assignment is requested with an empty order queue."""
    code = 'no_pending_orders'

    def __init__(self):
        super().__init__("No pending orders to assign.")


class NoDriversAvailableError(DispatchError):
    """Raised when the driver pool has nobody left to extract."""
    code = 'no_drivers_available'

    def __init__(self):
        super().__init__("No available drivers.")


class AlreadyCompletedError(DispatchError):
    """Raised when completing an order that is already completed.

    Informational: the order is in its final state and nothing was changed.
    """
    code = 'already_completed'
    informational = True

    def __init__(self, order_id: str):
        super().__init__(f"Order already completed: {order_id}", order_id=order_id)


class NotYetAssignedError(DispatchError):
    """Raised when completing an order that never got a driver."""
    code = 'not_yet_assigned'

    def __init__(self, order_id: str):
        super().__init__(f"Order not yet assigned to a driver: {order_id}", order_id=order_id)


class QueueEmptyError(DispatchError):
    """Raised when dequeuing from an empty order queue."""
    code = 'queue_empty'

    def __init__(self):
        super().__init__("Order queue is empty.")


class DriverNotFoundError(DispatchError):
    """Raised when a driver id is not part of the roster."""
    code = 'driver_not_found'

    def __init__(self, driver_id: str):
        super().__init__(f"Driver not found: {driver_id}", driver_id=driver_id)


class RosterError(DispatchError, ValueError):
    """Raised when a driver roster cannot be built from its source."""
    code = 'invalid_roster'
