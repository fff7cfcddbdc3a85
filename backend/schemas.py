from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field


class PlaceOrderRequest(BaseModel):
    delivery_address: str
    items: List[str] = Field(default_factory=list)


class DriverView(BaseModel):
    driver_id: str
    name: str
    next_available_at: datetime


class OrderView(BaseModel):
    order_id: str
    delivery_address: str
    items: List[str]
    item_count: int
    status: str
    assigned_driver_id: Optional[str] = None
    created_at: datetime
    completed_at: Optional[datetime] = None


class TrackingView(OrderView):
    driver: Optional[DriverView] = None


class AssignmentResponse(BaseModel):
    order: OrderView
    driver: DriverView
    delivery_time: datetime


class CompletionResponse(BaseModel):
    order: OrderView
    already_completed: bool = False
    message: str


class PendingOrderView(BaseModel):
    order_id: str
    delivery_address: str
    items: List[str]
    item_count: int
    created_at: datetime


class QueueResponse(BaseModel):
    count: int
    orders: List[PendingOrderView]
