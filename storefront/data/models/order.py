# storefront/data/models/order.py
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import Column, Integer, String, DateTime, Numeric, Boolean, Text, event
from sqlalchemy.orm import relationship

from storefront.data.database import Base
from storefront.domain.enums import OrderStatus


def _utcnow():
    return datetime.now(timezone.utc)


class OrderModel(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, nullable=False, index=True)

    shipping_address = Column(String, nullable=False)
    shipping_city = Column(String, nullable=False, index=True)
    shipping_postal_code = Column(String, nullable=False)
    shipping_country = Column(String, nullable=False)
    shipping_phone = Column(String, nullable=False)

    payment_method = Column(String, nullable=False)

    items_price = Column(Numeric(10, 2), nullable=False, default=0)
    tax_price = Column(Numeric(10, 2), nullable=False, default=0)
    shipping_price = Column(Numeric(10, 2), nullable=False, default=0)
    total_price = Column(Numeric(10, 2), nullable=False, default=0, index=True)

    status = Column(String, nullable=False, default=OrderStatus.PENDING.value, index=True)
    is_paid = Column(Boolean, nullable=False, default=False)
    paid_at = Column(DateTime(timezone=True), nullable=True)
    is_delivered = Column(Boolean, nullable=False, default=False)
    delivered_at = Column(DateTime(timezone=True), nullable=True)

    notes = Column(Text, nullable=False, default="")
    cancellation_reason = Column(Text, nullable=False, default="")
    cancelled_by = Column(String, nullable=True)
    cancelled_at = Column(DateTime(timezone=True), nullable=True)

    # optimistic locking, UPDATE ... WHERE id = ? AND version = ?
    version = Column(Integer, nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    items = relationship(
        "OrderItemModel",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItemModel.position",
        lazy="selectin",
    )

    __mapper_args__ = {"version_id_col": version}


@event.listens_for(OrderModel, "before_insert")
@event.listens_for(OrderModel, "before_update")
def _recompute_total_price(mapper, connection, target: OrderModel):
    # total nigdy nie pochodzi od klienta
    target.total_price = (
        Decimal(target.items_price or 0)
        + Decimal(target.tax_price or 0)
        + Decimal(target.shipping_price or 0)
    )
