"""Order status lifecycle.

Pending -> Confirmed -> Processing -> Shipped -> Delivered, with Cancelled
and Refunded reachable from the admin side. The functions here mutate an
order in place and never touch persistence; callers save the aggregate.
"""
from datetime import datetime

from storefront.data.models.order import OrderModel
from storefront.domain.enums import OrderStatus, CancelledBy
from storefront.domain.errors import (
    AlreadyCancelled,
    CannotCancelDelivered,
    CannotCancelShipped,
    InvalidStatus,
    ValidationError,
)

DEFAULT_USER_CANCEL_REASON = "Cancelled by user"
DEFAULT_ADMIN_CANCEL_REASON = "Cancelled by admin"


def parse_status(value: str | None) -> OrderStatus:
    if not value:
        raise ValidationError("Status is required")
    status = OrderStatus.parse(value)
    if status is None:
        raise InvalidStatus(value)
    return status


def require_cancellation_reason(reason: str | None) -> str:
    if not reason or not reason.strip():
        raise ValidationError("Cancellation reason is required")
    return reason.strip()


def _mark_cancelled(order: OrderModel, by: CancelledBy, reason: str, now: datetime) -> None:
    order.status = OrderStatus.CANCELLED.value
    order.cancellation_reason = reason
    order.cancelled_by = by.value
    order.cancelled_at = now


def cancel_by_user(order: OrderModel, reason: str | None, now: datetime) -> None:
    """Owner cancellation, only before the order leaves the warehouse."""
    if order.status == OrderStatus.CANCELLED.value:
        raise AlreadyCancelled()
    if order.status == OrderStatus.DELIVERED.value:
        raise CannotCancelDelivered()
    if order.status == OrderStatus.SHIPPED.value:
        raise CannotCancelShipped()

    reason = (reason or "").strip() or DEFAULT_USER_CANCEL_REASON
    _mark_cancelled(order, CancelledBy.USER, reason, now)


def cancel_by_admin(order: OrderModel, reason: str | None, now: datetime) -> None:
    reason = require_cancellation_reason(reason)

    # sprawdzamy status PRZED przypisaniem Cancelled
    if order.status == OrderStatus.CANCELLED.value:
        raise AlreadyCancelled()
    if order.status == OrderStatus.DELIVERED.value:
        raise CannotCancelDelivered()

    _mark_cancelled(order, CancelledBy.ADMIN, reason, now)


def apply_admin_status(order: OrderModel, target: str | None, notes: str | None, now: datetime) -> OrderStatus:
    """Move the order to ``target`` on behalf of an admin.

    Setting the current value again is a no-op for the cancellation and
    delivery bookkeeping. Moving into Cancelled goes through the same guard
    as an explicit admin cancel (a delivered order stays delivered).
    """
    status = parse_status(target)
    previous = order.status

    if status is OrderStatus.CANCELLED and previous != OrderStatus.CANCELLED.value:
        if previous == OrderStatus.DELIVERED.value:
            raise CannotCancelDelivered()
        _mark_cancelled(
            order,
            CancelledBy.ADMIN,
            order.cancellation_reason or DEFAULT_ADMIN_CANCEL_REASON,
            now,
        )

    order.status = status.value
    if notes:
        order.notes = notes

    if status is OrderStatus.DELIVERED and not order.is_delivered:
        order.is_delivered = True
        order.delivered_at = now

    return status
