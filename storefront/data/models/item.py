# storefront/data/models/item.py
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime, Numeric, Text, JSON, CheckConstraint

from storefront.data.database import Base
from storefront.domain.enums import Availability


class ItemModel(Base):
    __tablename__ = "items"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    category = Column(String, nullable=False)

    price = Column(Numeric(10, 2), nullable=False)
    discount_price = Column(Numeric(10, 2), nullable=True)
    availability = Column(String, nullable=False, default=Availability.IN_STOCK.value)

    images = Column(JSON, nullable=False, default=list)
    description = Column(Text, nullable=False, default="")

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        CheckConstraint("price > 0", name="ck_item_price_positive"),
        CheckConstraint(
            "discount_price IS NULL OR (discount_price > 0 AND discount_price < price)",
            name="ck_item_discount_below_price",
        ),
    )
