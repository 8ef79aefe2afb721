# storefront/services/order_service.py
import math
from datetime import datetime, timezone, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Callable

from sqlalchemy.orm import Session

from storefront.data.models.order import OrderModel
from storefront.data.models.order_item import OrderItemModel
from storefront.domain import order_status
from storefront.domain.enums import Availability, OrderStatus, PaymentMethod
from storefront.domain.errors import (
    AccessDenied,
    ItemNotFound,
    ItemUnavailable,
    OrderNotFound,
    PriceMismatch,
    StorefrontError,
    ValidationError,
)
from storefront.domain.schemas import OrderCreate
from storefront.repos.order_repo import OrderRepo, OrderFilter
from storefront.services.catalog_client import CatalogClient
from storefront.domain.principal import Principal
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

CENT = Decimal("0.01")
SHIPPING_FIELDS = ("address", "city", "postal_code", "country", "phone")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    # sqlite oddaje naive datetime, wszystko zapisujemy w UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _money(value) -> Decimal:
    return Decimal(value or 0).quantize(CENT, rounding=ROUND_HALF_UP)


def order_to_dict(order: OrderModel) -> Dict[str, Any]:
    return {
        "id": order.id,
        "user_id": order.user_id,
        "order_items": [
            {
                "item_id": i.item_id,
                "name": i.name,
                "unit_price": i.unit_price,
                "quantity": i.quantity,
                "image": i.image,
            }
            for i in order.items
        ],
        "shipping_address": {
            "address": order.shipping_address,
            "city": order.shipping_city,
            "postal_code": order.shipping_postal_code,
            "country": order.shipping_country,
            "phone": order.shipping_phone,
        },
        "payment_method": order.payment_method,
        "items_price": order.items_price,
        "tax_price": order.tax_price,
        "shipping_price": order.shipping_price,
        "total_price": order.total_price,
        "status": order.status,
        "is_paid": order.is_paid,
        "paid_at": order.paid_at,
        "is_delivered": order.is_delivered,
        "delivered_at": order.delivered_at,
        "notes": order.notes,
        "cancellation_reason": order.cancellation_reason,
        "cancelled_by": order.cancelled_by,
        "cancelled_at": order.cancelled_at,
        "version": order.version,
        "created_at": order.created_at,
        "updated_at": order.updated_at,
        "summary": {
            "total_items": sum(i.quantity for i in order.items),
            "total_price": order.total_price,
            "status": order.status,
        },
    }


class OrderService:
    """
    Use case'y domeny zamowien.
    commands (create, cancel, admin_cancel, update_status) robia read-validate-write,
    queries (get, list, stats) tylko odczyt
    """

    def __init__(self, db: Session, catalog: CatalogClient, clock: Callable[[], datetime] = _utcnow):
        self.repo = OrderRepo(db)
        self.catalog = catalog
        self.clock = clock

    # commands
    def create_order(self, principal: Principal, payload: OrderCreate) -> Dict[str, Any]:
        """
        Validates the proposal and persists a Pending order.

        Checks run in a fixed order and the first failure wins: line items
        present, complete shipping address, known payment method, then per
        line item existence, stock and price match against the catalog.
        Nothing is written unless every check passes.
        """
        if not payload.order_items:
            raise ValidationError("Order items are required")

        address = payload.shipping_address
        if address is None:
            raise ValidationError("Shipping address is required")
        missing = [f for f in SHIPPING_FIELDS if not (getattr(address, f) or "").strip()]
        if missing:
            raise ValidationError(f"Shipping address is missing: {', '.join(missing)}")

        if not payload.payment_method:
            raise ValidationError("Payment method is required")
        if payload.payment_method not in {m.value for m in PaymentMethod}:
            raise ValidationError("Invalid payment method")

        for line in payload.order_items:
            item = self.catalog.find_item(line.item_id)
            if item is None:
                raise ItemNotFound(line.item_id, line.name)

            if item.availability == Availability.OUT_OF_STOCK.value:
                raise ItemUnavailable(line.item_id, line.name)

            if line.unit_price != item.authoritative_price:
                logger.warning(
                    f"Price mismatch for item {line.item_id}: submitted {line.unit_price}, "
                    f"catalog {item.authoritative_price}"
                )
                raise PriceMismatch(line.item_id, line.name)

        order = OrderModel(
            user_id=principal.id,
            shipping_address=address.address.strip(),
            shipping_city=address.city.strip(),
            shipping_postal_code=address.postal_code.strip(),
            shipping_country=address.country.strip(),
            shipping_phone=address.phone.strip(),
            payment_method=payload.payment_method,
            items_price=payload.items_price,
            tax_price=payload.tax_price,
            shipping_price=payload.shipping_price,
            notes=payload.notes,
            is_paid=False,
            is_delivered=False,
            items=[
                OrderItemModel(
                    position=pos,
                    item_id=line.item_id,
                    name=line.name,
                    unit_price=line.unit_price,
                    quantity=line.quantity,
                    image=line.image,
                )
                for pos, line in enumerate(payload.order_items)
            ],
        )
        # status ustawiamy jawnie, nie polegamy na default kolumny
        order.status = OrderStatus.PENDING.value

        created = self.repo.create(order)
        logger.info(f"Order {created.id} created for user {principal.id}, total {created.total_price}")
        return order_to_dict(created)

    def cancel_order(self, principal: Principal, order_id: int, reason: str | None) -> Dict[str, Any]:
        order = self._load(order_id)

        if order.user_id != principal.id:
            raise AccessDenied("Access denied. You can only cancel your own orders.")

        try:
            order_status.cancel_by_user(order, reason, self.clock())
        except StorefrontError:
            logger.warning(f"User {principal.id} could not cancel order {order_id} in status {order.status}")
            raise

        saved = self.repo.save(order)
        logger.info(f"Order {order_id} cancelled by user {principal.id}")
        return order_to_dict(saved)

    def admin_cancel_order(self, order_id: int, reason: str | None) -> Dict[str, Any]:
        order_status.require_cancellation_reason(reason)
        order = self._load(order_id)

        order_status.cancel_by_admin(order, reason, self.clock())

        saved = self.repo.save(order)
        logger.info(f"Order {order_id} cancelled by admin")
        return order_to_dict(saved)

    def update_status(self, order_id: int, status: str | None, notes: str | None) -> Dict[str, Any]:
        target = order_status.parse_status(status)
        order = self._load(order_id)
        previous = order.status

        order_status.apply_admin_status(order, target.value, notes, self.clock())

        saved = self.repo.save(order)
        logger.info(f"Order {order_id} status {previous} -> {saved.status}")
        return order_to_dict(saved)

    # queries
    def get_order(self, principal: Principal, order_id: int) -> Dict[str, Any]:
        order = self._load(order_id)

        if order.user_id != principal.id and not principal.is_admin:
            raise AccessDenied("Access denied. You can only view your own orders.")

        return order_to_dict(order)

    def list_orders(
        self,
        order_filter: OrderFilter,
        page: int,
        limit: int,
        sort_by: str = "created_at",
        sort_order: str = "desc",
    ) -> Dict[str, Any]:
        orders = self.repo.find(order_filter, sort_by=sort_by, sort_order=sort_order, page=page, limit=limit)
        total = self.repo.count(order_filter)

        return {
            "orders": [order_to_dict(o) for o in orders],
            "pagination": {
                "current_page": page,
                "total_pages": math.ceil(total / limit) if limit else 0,
                "total_orders": total,
                "orders_per_page": limit,
            },
        }

    def list_user_orders(self, principal: Principal, page: int, limit: int, status: str | None = None) -> Dict[str, Any]:
        return self.list_orders(OrderFilter(user_id=principal.id, status=status), page, limit)

    def order_stats(self, days: int) -> Dict[str, Any]:
        """Revenue and status breakdown over the last ``days`` days.

        Daily buckets use the server's local calendar date.
        """
        since = self.clock() - timedelta(days=days)
        orders = self.repo.created_since(since)

        total_orders = len(orders)
        total_revenue = sum((Decimal(o.total_price) for o in orders), Decimal("0"))
        average = total_revenue / total_orders if total_orders else Decimal("0")

        status_breakdown: Dict[str, int] = {}
        daily_revenue: Dict[str, Decimal] = {}
        for o in orders:
            status_breakdown[o.status] = status_breakdown.get(o.status, 0) + 1
            day = _as_utc(o.created_at).astimezone().date().isoformat()
            daily_revenue[day] = daily_revenue.get(day, Decimal("0")) + Decimal(o.total_price)

        return {
            "period": f"{days} days",
            "total_orders": total_orders,
            "total_revenue": _money(total_revenue),
            "average_order_value": _money(average),
            "status_breakdown": status_breakdown,
            "daily_revenue": {day: _money(v) for day, v in sorted(daily_revenue.items())},
        }

    def _load(self, order_id: int) -> OrderModel:
        order = self.repo.get(order_id)
        if not order:
            raise OrderNotFound(order_id)
        return order
