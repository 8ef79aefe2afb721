from datetime import timedelta
from decimal import Decimal

import pytest
from sqlalchemy import select, func

from storefront.data.models.order import OrderModel
from storefront.domain.errors import (
    AccessDenied,
    CannotCancelShipped,
    InvalidStatus,
    ItemNotFound,
    ItemUnavailable,
    OrderNotFound,
    PriceMismatch,
    ValidationError,
)
from storefront.domain.schemas import OrderCreate
from storefront.services.catalog_client import SqlCatalog
from storefront.services.order_service import OrderService


@pytest.fixture
def svc(db, now):
    return OrderService(db, catalog=SqlCatalog(db), clock=lambda: now)


def proposal(item_id, unit_price="100", quantity=2, **overrides):
    data = {
        "order_items": [
            {"item_id": item_id, "name": "A", "unit_price": unit_price, "quantity": quantity, "image": "a.jpg"}
        ],
        "shipping_address": {
            "address": "1 Main St",
            "city": "Warsaw",
            "postal_code": "00-001",
            "country": "PL",
            "phone": "+48 600 000 000",
        },
        "payment_method": "Credit Card",
        "items_price": "200",
        "tax_price": "20",
        "shipping_price": "10",
    }
    data.update(overrides)
    return OrderCreate.model_validate(data)


def order_count(db):
    return db.execute(select(func.count(OrderModel.id))).scalar_one()


class TestCreateOrder:
    def test_creates_pending_order_with_derived_total(self, svc, items, user):
        order = svc.create_order(user, proposal(items["A"]))

        assert order["total_price"] == Decimal("230")
        assert order["status"] == "Pending"
        assert order["is_paid"] is False
        assert order["is_delivered"] is False
        assert order["user_id"] == user.id
        assert order["cancelled_by"] is None
        assert order["order_items"][0]["unit_price"] == Decimal("100")
        assert order["summary"]["total_items"] == 2

    def test_discount_price_is_authoritative(self, svc, db, items, user):
        order = svc.create_order(user, proposal(items["ring"], unit_price="99.00"))
        assert order["status"] == "Pending"

        with pytest.raises(PriceMismatch):
            svc.create_order(user, proposal(items["ring"], unit_price="120.00"))
        assert order_count(db) == 1

    def test_price_mismatch_persists_nothing(self, svc, db, items, user):
        with pytest.raises(PriceMismatch):
            svc.create_order(user, proposal(items["A"], unit_price="99.99"))
        assert order_count(db) == 0

    def test_line_items_keep_submitted_order(self, svc, items, user):
        payload = proposal(items["A"])
        payload.order_items.append(
            payload.order_items[0].model_copy(update={"item_id": items["necklace"], "name": "N", "unit_price": Decimal("340")})
        )
        order = svc.create_order(user, payload)
        assert [i["item_id"] for i in order["order_items"]] == [items["A"], items["necklace"]]

    def test_empty_items_win_over_other_failures(self, svc, items, user):
        payload = proposal(items["A"], order_items=[], shipping_address=None, payment_method=None)
        with pytest.raises(ValidationError, match="Order items are required"):
            svc.create_order(user, payload)

    def test_shipping_address_required(self, svc, items, user):
        with pytest.raises(ValidationError, match="Shipping address is required"):
            svc.create_order(user, proposal(items["A"], shipping_address=None))

    def test_shipping_address_fields_required(self, svc, items, user):
        address = {"address": "1 Main St", "city": "Warsaw", "postal_code": "00-001", "country": "PL", "phone": " "}
        with pytest.raises(ValidationError, match="phone"):
            svc.create_order(user, proposal(items["A"], shipping_address=address))

    def test_payment_method_checked_before_items(self, svc, db, user):
        with pytest.raises(ValidationError, match="Invalid payment method"):
            svc.create_order(user, proposal(12345, payment_method="Bitcoin"))
        with pytest.raises(ValidationError, match="Payment method is required"):
            svc.create_order(user, proposal(12345, payment_method=None))

    def test_item_not_found(self, svc, items, user):
        with pytest.raises(ItemNotFound):
            svc.create_order(user, proposal(12345))

    def test_out_of_stock(self, svc, db, items, user):
        with pytest.raises(ItemUnavailable):
            svc.create_order(user, proposal(items["bracelet"], unit_price="75"))
        assert order_count(db) == 0

    def test_stock_checked_before_price(self, svc, items, user):
        with pytest.raises(ItemUnavailable):
            svc.create_order(user, proposal(items["bracelet"], unit_price="1"))

    def test_total_follows_items_price(self, svc, db, items, user):
        created = svc.create_order(user, proposal(items["A"]))
        order = db.get(OrderModel, created["id"])

        order.items_price = Decimal("300")
        order.total_price = Decimal("1")
        db.commit()
        db.refresh(order)

        assert order.total_price == Decimal("330")


class TestReadAccess:
    def test_owner_and_admin_can_read(self, svc, make_order, user, admin):
        order = make_order()
        assert svc.get_order(user, order.id)["id"] == order.id
        assert svc.get_order(admin, order.id)["id"] == order.id

    def test_other_user_denied(self, svc, make_order, other_user):
        order = make_order()
        with pytest.raises(AccessDenied):
            svc.get_order(other_user, order.id)

    def test_missing(self, svc, user):
        with pytest.raises(OrderNotFound):
            svc.get_order(user, 404)


class TestTransitions:
    def test_user_cancel(self, svc, make_order, user, now):
        order = make_order()
        result = svc.cancel_order(user, order.id, "changed mind")

        assert result["status"] == "Cancelled"
        assert result["cancelled_by"] == "user"
        assert result["cancellation_reason"] == "changed mind"
        assert result["version"] == 2

    def test_user_cannot_cancel_foreign_order(self, svc, make_order, other_user, admin):
        order = make_order()
        with pytest.raises(AccessDenied):
            svc.cancel_order(other_user, order.id, None)
        with pytest.raises(AccessDenied):
            svc.cancel_order(admin, order.id, None)

    def test_shipped_order_unchanged(self, svc, db, make_order, user):
        order = make_order(status="Shipped")
        with pytest.raises(CannotCancelShipped):
            svc.cancel_order(user, order.id, None)

        db.refresh(order)
        assert order.status == "Shipped"
        assert order.version == 1

    def test_admin_cancel_checks_reason_before_lookup(self, svc):
        with pytest.raises(ValidationError):
            svc.admin_cancel_order(404, None)

    def test_admin_status_delivered(self, svc, make_order, now):
        order = make_order()
        result = svc.update_status(order.id, "Delivered", None)

        assert result["status"] == "Delivered"
        assert result["is_delivered"] is True
        assert result["delivered_at"] is not None

    def test_admin_status_invalid_before_lookup(self, svc):
        with pytest.raises(InvalidStatus):
            svc.update_status(404, "Teleported", None)

    def test_admin_status_same_value(self, svc, make_order):
        order = make_order(status="Processing")
        result = svc.update_status(order.id, "Processing", None)

        assert result["status"] == "Processing"
        assert result["cancelled_by"] is None
        assert result["cancelled_at"] is None
        assert result["version"] == 1


class TestStats:
    def test_window_and_breakdown(self, svc, make_order, now):
        make_order(status="Pending", created_at=now - timedelta(days=1))
        make_order(status="Delivered", items_price="100.00", tax_price="0", shipping_price="0",
                   created_at=now - timedelta(days=1, hours=1))
        make_order(status="Cancelled", created_at=now - timedelta(days=3))
        make_order(status="Pending", created_at=now - timedelta(days=40))

        stats = svc.order_stats(30)

        assert stats["period"] == "30 days"
        assert stats["total_orders"] == 3
        assert stats["total_revenue"] == Decimal("560.00")
        assert stats["average_order_value"] == Decimal("186.67")
        assert stats["status_breakdown"] == {"Pending": 1, "Delivered": 1, "Cancelled": 1}
        assert sum(stats["daily_revenue"].values()) == Decimal("560.00")

        day = (now - timedelta(days=3)).astimezone().date().isoformat()
        assert stats["daily_revenue"][day] == Decimal("230.00")

    def test_empty_window(self, svc):
        stats = svc.order_stats(7)
        assert stats["total_orders"] == 0
        assert stats["total_revenue"] == Decimal("0.00")
        assert stats["average_order_value"] == Decimal("0.00")
        assert stats["status_breakdown"] == {}
        assert stats["daily_revenue"] == {}
