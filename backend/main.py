from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException, Request

from dispatcher.config import API_HOST, API_PORT
from dispatcher.dispatch import DispatchEngine
from dispatcher.errors import (
    AlreadyCompletedError,
    DispatchError,
    NoDriversAvailableError,
    OrderNotFoundError,
)
from dispatcher.utils import get_logger, setup_logging

from .schemas import (
    AssignmentResponse,
    CompletionResponse,
    OrderView,
    PlaceOrderRequest,
    QueueResponse,
    TrackingView,
)

logger = get_logger("api")


def http_status_for(error: DispatchError) -> int:
    """HTTP status code for a dispatch error"""
    if isinstance(error, OrderNotFoundError):
        return 404
    if isinstance(error, NoDriversAvailableError):
        return 503
    return 409


def to_http_exception(error: DispatchError) -> HTTPException:
    return HTTPException(status_code=http_status_for(error), detail=error.to_dict())


def create_app(engine: Optional[DispatchEngine] = None) -> FastAPI:
    """
    Creates the dispatch HTTP application.

    Args:
        engine: Engine to serve. When omitted one is built from the
            configured roster on startup.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if engine is None:
            app.state.engine = DispatchEngine.from_config()
        yield

    app = FastAPI(title="Food Delivery Dispatch API", version="0.1.0", lifespan=lifespan)
    if engine is not None:
        app.state.engine = engine

    def get_engine(request: Request) -> DispatchEngine:
        return request.app.state.engine

    @app.get("/")
    def health_check(request: Request) -> Dict[str, Any]:
        """Returns the health status of the service."""
        engine_ = get_engine(request)
        return {
            "status": "ok",
            "drivers": len(engine_.drivers()),
            "pending_orders": engine_.pending_count(),
        }

    @app.post("/orders", response_model=OrderView, status_code=201)
    def place_order(req: PlaceOrderRequest, request: Request):
        order = get_engine(request).place_order(req.delivery_address, req.items)
        return order.to_dict()

    @app.get("/orders/{order_id}", response_model=TrackingView)
    def track_order(order_id: str, request: Request):
        try:
            return get_engine(request).track_order(order_id)
        except DispatchError as e:
            raise to_http_exception(e)

    @app.post("/orders/{order_id}/complete", response_model=CompletionResponse)
    def complete_delivery(order_id: str, request: Request):
        engine_ = get_engine(request)
        try:
            order = engine_.complete_delivery(order_id)
        except AlreadyCompletedError as e:
            # Informational: report the order as it stands
            current = engine_.track_order(order_id)
            return {"order": current, "already_completed": True, "message": e.message}
        except DispatchError as e:
            raise to_http_exception(e)
        return {"order": order.to_dict(), "message": f"Order {order_id} delivered"}

    @app.post("/assignments", response_model=AssignmentResponse)
    def assign_driver(request: Request):
        try:
            order, driver, delivery_time = get_engine(request).assign_driver()
        except DispatchError as e:
            raise to_http_exception(e)
        return {"order": order.to_dict(), "driver": driver.to_dict(), "delivery_time": delivery_time}

    @app.get("/queue", response_model=QueueResponse)
    def pending_queue(request: Request):
        engine_ = get_engine(request)
        return {"count": engine_.pending_count(), "orders": engine_.pending_queue_snapshot()}

    @app.get("/summary")
    def summary(request: Request) -> Dict[str, Any]:
        return get_engine(request).summarize()

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    setup_logging()
    logger.info("Starting dispatch API on %s:%d", API_HOST, API_PORT)
    uvicorn.run("backend.main:app", host=API_HOST, port=API_PORT)
