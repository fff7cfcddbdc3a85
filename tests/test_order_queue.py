import pytest

from dispatcher.errors import QueueEmptyError
from dispatcher.stores import OrderQueue


def test_fifo_order():
    queue = OrderQueue()
    for order_id in ("ORD1", "ORD2", "ORD3"):
        queue.enqueue(order_id)

    assert queue.peek_all() == ["ORD1", "ORD2", "ORD3"]
    assert queue.dequeue() == "ORD1"
    assert queue.dequeue() == "ORD2"
    assert queue.size() == 1


def test_peek_all_is_non_destructive_snapshot():
    queue = OrderQueue()
    queue.enqueue("ORD1")
    snapshot = queue.peek_all()
    snapshot.append("ORD9")

    assert queue.peek_all() == ["ORD1"]
    assert len(queue) == 1


def test_dequeue_empty_raises():
    queue = OrderQueue()
    assert queue.is_empty()
    with pytest.raises(QueueEmptyError):
        queue.dequeue()
