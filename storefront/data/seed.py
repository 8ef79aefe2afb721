# storefront/data/seed.py
from decimal import Decimal

from sqlalchemy.orm import Session

from storefront.data.database import SessionLocal, init_db
from storefront.data.models.item import ItemModel
from storefront.domain.enums import Availability
from storefront.repos.item_repo import ItemRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

DEMO_ITEMS = [
    {"name": "Silver Ring", "category": "Rings", "price": Decimal("120.00"), "discount_price": Decimal("99.00")},
    {"name": "Pearl Necklace", "category": "Necklaces", "price": Decimal("340.00"), "discount_price": None},
    {"name": "Gold Hoops", "category": "Earrings", "price": Decimal("210.50"), "discount_price": None},
    {
        "name": "Charm Bracelet",
        "category": "Bracelets",
        "price": Decimal("75.00"),
        "discount_price": None,
        "availability": Availability.OUT_OF_STOCK.value,
    },
]


def seed_items(db: Session) -> int:
    """Insert the demo catalog when the items table is empty, returns rows added."""
    repo = ItemRepo(db)
    # not forcing: only seed if empty
    if repo.count_items():
        return 0

    items = [ItemModel(**data) for data in DEMO_ITEMS]
    repo.add_items(items)
    logger.info(f"Seeded {len(items)} catalog items")
    return len(items)


def seed():
    init_db()
    db = SessionLocal()
    try:
        seed_items(db)
    finally:
        db.close()


if __name__ == "__main__":
    seed()
