# storefront/api/routers/orders.py
from datetime import datetime
from decimal import Decimal

from fastapi import APIRouter, Depends, Query

from storefront.api.deps import get_order_service, get_principal, require_role
from storefront.domain.enums import Role
from storefront.domain.principal import Principal
from storefront.domain.schemas import (
    CancelIn,
    OrderCreate,
    OrderEnvelope,
    OrderListOut,
    OrderStatsEnvelope,
    StatusUpdateIn,
)
from storefront.repos.order_repo import OrderFilter
from storefront.services.order_service import OrderService
from storefront.utils.settings import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, ORDER_STATS_DEFAULT_DAYS

router = APIRouter(prefix="/orders", tags=["orders"])

admin_only = require_role(Role.ADMIN)


@router.post("/", response_model=OrderEnvelope, status_code=201)
def create_order(
    payload: OrderCreate,
    principal: Principal = Depends(get_principal),
    svc: OrderService = Depends(get_order_service),
):
    order = svc.create_order(principal, payload)
    return {"message": "Order created successfully", "order": order}


@router.get("/my-orders", response_model=OrderListOut)
def get_my_orders(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    status: str | None = Query(None),
    principal: Principal = Depends(get_principal),
    svc: OrderService = Depends(get_order_service),
):
    result = svc.list_user_orders(principal, page, limit, status)
    return {"message": "Orders retrieved successfully", **result}


@router.get("/stats/overview", response_model=OrderStatsEnvelope)
def get_order_stats(
    period: int = Query(ORDER_STATS_DEFAULT_DAYS, ge=1, le=3650),
    _: Principal = Depends(admin_only),
    svc: OrderService = Depends(get_order_service),
):
    stats = svc.order_stats(period)
    return {"message": "Order statistics retrieved successfully", "stats": stats}


@router.get("/", response_model=OrderListOut)
def get_all_orders(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    status: str | None = Query(None),
    user_id: int | None = Query(None),
    city: str | None = Query(None),
    min_price: Decimal | None = Query(None, ge=0),
    max_price: Decimal | None = Query(None, ge=0),
    start_date: datetime | None = Query(None),
    end_date: datetime | None = Query(None),
    sort_by: str = Query("created_at", pattern="^(created_at|updated_at|total_price|status)$"),
    sort_order: str = Query("desc", pattern="^(asc|desc)$"),
    _: Principal = Depends(admin_only),
    svc: OrderService = Depends(get_order_service),
):
    order_filter = OrderFilter(
        status=status,
        user_id=user_id,
        city=city,
        min_price=min_price,
        max_price=max_price,
        start_date=start_date,
        end_date=end_date,
    )
    result = svc.list_orders(order_filter, page, limit, sort_by=sort_by, sort_order=sort_order)
    return {"message": "Orders retrieved successfully", **result}


@router.get("/{order_id}", response_model=OrderEnvelope)
def get_order(
    order_id: int,
    principal: Principal = Depends(get_principal),
    svc: OrderService = Depends(get_order_service),
):
    order = svc.get_order(principal, order_id)
    return {"message": "Order retrieved successfully", "order": order}


@router.put("/{order_id}/cancel", response_model=OrderEnvelope)
def cancel_order(
    order_id: int,
    payload: CancelIn | None = None,
    principal: Principal = Depends(get_principal),
    svc: OrderService = Depends(get_order_service),
):
    reason = payload.cancellation_reason if payload else None
    order = svc.cancel_order(principal, order_id, reason)
    return {"message": "Order cancelled successfully", "order": order}


@router.put("/{order_id}/status", response_model=OrderEnvelope)
def update_order_status(
    order_id: int,
    payload: StatusUpdateIn,
    _: Principal = Depends(admin_only),
    svc: OrderService = Depends(get_order_service),
):
    order = svc.update_status(order_id, payload.status, payload.notes)
    return {"message": "Order status updated successfully", "order": order}


@router.put("/{order_id}/admin-cancel", response_model=OrderEnvelope)
def admin_cancel_order(
    order_id: int,
    payload: CancelIn,
    _: Principal = Depends(admin_only),
    svc: OrderService = Depends(get_order_service),
):
    order = svc.admin_cancel_order(order_id, payload.cancellation_reason)
    return {"message": "Order cancelled successfully by admin", "order": order}
