from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.data.models.price import PriceModel


class PriceRepo:
    def __init__(self, db: Session):
        self.db = db

    def create_price(self, price: PriceModel) -> PriceModel:
        self.db.add(price)
        self.db.commit()
        self.db.refresh(price)
        return price

    def get_price(self, price_id: int) -> PriceModel | None:
        return self.db.get(PriceModel, price_id)

    def list_prices(self, active_only: bool = True) -> list[PriceModel]:
        stmt = select(PriceModel).order_by(PriceModel.created_at.desc(), PriceModel.id.desc())
        if active_only:
            stmt = stmt.where(PriceModel.is_active.is_(True))
        return list(self.db.execute(stmt).scalars().all())

    def save_price(self, price: PriceModel) -> PriceModel:
        self.db.commit()
        self.db.refresh(price)
        return price
