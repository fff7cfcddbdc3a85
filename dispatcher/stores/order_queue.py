# dispatcher/stores/order_queue.py
"""FIFO of pending order ids"""
from collections import deque
from typing import Deque, List

from dispatcher.errors import QueueEmptyError


class OrderQueue:
    """Pending order ids, front is the next to be dispatched.

    Holds identifiers only; the orders themselves live in OrderStore.
    """

    def __init__(self) -> None:
        self._ids: Deque[str] = deque()

    def enqueue(self, order_id: str) -> None:
        self._ids.append(order_id)

    def dequeue(self) -> str:
        if not self._ids:
            raise QueueEmptyError()
        return self._ids.popleft()

    def peek_all(self) -> List[str]:
        """Non-destructive snapshot, front to back"""
        return list(self._ids)

    def size(self) -> int:
        return len(self._ids)

    def is_empty(self) -> bool:
        return not self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def __contains__(self, order_id: str) -> bool:
        return order_id in self._ids
