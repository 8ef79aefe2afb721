# storefront/repos/order_repo.py
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import select, func
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from storefront.data.models.order import OrderModel
from storefront.domain.errors import ConcurrentModification

SORTABLE_COLUMNS = {
    "created_at": OrderModel.created_at,
    "updated_at": OrderModel.updated_at,
    "total_price": OrderModel.total_price,
    "status": OrderModel.status,
}


def _as_utc(value: datetime) -> datetime:
    # created_at trzymamy w UTC, naive wartosci traktujemy jako UTC
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc)


@dataclass
class OrderFilter:
    status: str | None = None
    user_id: int | None = None
    city: str | None = None
    min_price: Decimal | None = None
    max_price: Decimal | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None

    def clauses(self) -> list:
        clauses = []
        if self.status:
            clauses.append(OrderModel.status == self.status)
        if self.user_id is not None:
            clauses.append(OrderModel.user_id == self.user_id)
        if self.city:
            clauses.append(OrderModel.shipping_city.ilike(f"%{self.city}%"))
        if self.min_price is not None:
            clauses.append(OrderModel.total_price >= self.min_price)
        if self.max_price is not None:
            clauses.append(OrderModel.total_price <= self.max_price)
        if self.start_date is not None:
            clauses.append(OrderModel.created_at >= _as_utc(self.start_date))
        if self.end_date is not None:
            clauses.append(OrderModel.created_at <= _as_utc(self.end_date))
        return clauses


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def create(self, order: OrderModel) -> OrderModel:
        self.db.add(order)
        self.db.commit()
        self.db.refresh(order)
        return order

    def get(self, order_id: int) -> OrderModel | None:
        return self.db.get(OrderModel, order_id)

    def save(self, order: OrderModel) -> OrderModel:
        """Whole-aggregate update guarded by the version column."""
        try:
            self.db.commit()
        except StaleDataError:
            self.db.rollback()
            raise ConcurrentModification(order.id)
        self.db.refresh(order)
        return order

    def find(
        self,
        order_filter: OrderFilter,
        sort_by: str = "created_at",
        sort_order: str = "desc",
        page: int = 1,
        limit: int = 10,
    ) -> list[OrderModel]:
        column = SORTABLE_COLUMNS.get(sort_by, OrderModel.created_at)
        ordering = column.asc() if sort_order == "asc" else column.desc()

        stmt = (
            select(OrderModel)
            .where(*order_filter.clauses())
            # id jako tie-breaker, stabilna paginacja
            .order_by(ordering, OrderModel.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        return list(self.db.execute(stmt).scalars().all())

    def count(self, order_filter: OrderFilter) -> int:
        stmt = select(func.count(OrderModel.id)).where(*order_filter.clauses())
        return self.db.execute(stmt).scalar_one()

    def created_since(self, since: datetime) -> list[OrderModel]:
        stmt = select(OrderModel).where(OrderModel.created_at >= since)
        return list(self.db.execute(stmt).scalars().all())
