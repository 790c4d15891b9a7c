"""Order endpoints for REST API."""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, Query

from core.application.dtos.order_dto import OrderDTO, OrderListDTO
from core.application.services.order_service import OrderApplicationService

from apps.api.deps import get_order_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/orders", tags=["orders"])


@router.get("/{order_id}", response_model=OrderDTO)
async def get_order(
    order_id: str,
    service: OrderApplicationService = Depends(get_order_service),
) -> OrderDTO:
    """Get order by ID.

    Args:
        order_id: Order ID string
        service: OrderApplicationService instance

    Returns:
        OrderDTO with order details

    Raises:
        HTTPException: If order not found
    """
    order = await service.get_order(order_id)
    if not order:
        raise HTTPException(status_code=404, detail=f"Order {order_id} not found")
    return order


@router.get("/{order_id}/events")
async def get_order_events(
    order_id: str,
    service: OrderApplicationService = Depends(get_order_service),
) -> List[Dict[str, Any]]:
    """Audit trail of an order's domain events, oldest first."""
    order = await service.get_order(order_id)
    if not order:
        raise HTTPException(status_code=404, detail=f"Order {order_id} not found")
    return await service.get_order_events(order_id)


@router.get("", response_model=OrderListDTO)
async def list_orders(
    limit: int = Query(default=100, ge=1, le=1000, description="Maximum number of orders"),
    offset: int = Query(default=0, ge=0, description="Number of orders to skip"),
    service: OrderApplicationService = Depends(get_order_service),
) -> OrderListDTO:
    """List orders with pagination, newest first.

    Args:
        limit: Maximum number of orders to return
        offset: Number of orders to skip
        service: OrderApplicationService instance

    Returns:
        OrderListDTO
    """
    return await service.list_orders(limit=limit, offset=offset)
