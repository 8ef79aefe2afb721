from sqlalchemy import select, func
from sqlalchemy.orm import Session

from storefront.data.models.item import ItemModel


class ItemRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_item(self, item_id: int) -> ItemModel | None:
        return self.db.get(ItemModel, item_id)

    def count_items(self) -> int:
        return self.db.execute(select(func.count(ItemModel.id))).scalar_one()

    def add_items(self, items: list[ItemModel]) -> list[ItemModel]:
        self.db.add_all(items)
        self.db.commit()
        return items
