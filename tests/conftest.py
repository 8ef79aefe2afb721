from contextlib import asynccontextmanager
from datetime import datetime, timezone
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import storefront.data.models  # noqa: F401
from storefront.data.database import Base, get_db
from storefront.data.models.item import ItemModel
from storefront.data.models.order import OrderModel
from storefront.data.models.order_item import OrderItemModel
from storefront.domain.enums import Availability, Role
from storefront.domain.principal import Principal
from storefront.main import create_app

USER_ID = 1
OTHER_USER_ID = 2
ADMIN_ID = 99


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(bind=engine, autoflush=False)()
    yield session
    session.close()


@pytest.fixture
def items(db):
    """Catalog used across tests, keyed by a short name."""
    rows = {
        "A": ItemModel(name="A", category="Rings", price=Decimal("100.00")),
        "ring": ItemModel(
            name="Silver Ring",
            category="Rings",
            price=Decimal("120.00"),
            discount_price=Decimal("99.00"),
        ),
        "necklace": ItemModel(name="Pearl Necklace", category="Necklaces", price=Decimal("340.00")),
        "bracelet": ItemModel(
            name="Charm Bracelet",
            category="Bracelets",
            price=Decimal("75.00"),
            availability=Availability.OUT_OF_STOCK.value,
        ),
    }
    db.add_all(rows.values())
    db.commit()
    return {key: item.id for key, item in rows.items()}


@pytest.fixture
def make_order(db):
    def _make(
        user_id=USER_ID,
        status="Pending",
        city="Warsaw",
        items_price="200.00",
        tax_price="20.00",
        shipping_price="10.00",
        created_at=None,
    ):
        order = OrderModel(
            user_id=user_id,
            shipping_address="1 Main St",
            shipping_city=city,
            shipping_postal_code="00-001",
            shipping_country="PL",
            shipping_phone="+48 600 000 000",
            payment_method="PayPal",
            items_price=Decimal(items_price),
            tax_price=Decimal(tax_price),
            shipping_price=Decimal(shipping_price),
            status=status,
            items=[
                OrderItemModel(position=0, item_id=1, name="A", unit_price=Decimal("100.00"), quantity=2, image=""),
            ],
        )
        if created_at is not None:
            order.created_at = created_at
        db.add(order)
        db.commit()
        db.refresh(order)
        return order

    return _make


@pytest.fixture
def user():
    return Principal(id=USER_ID, role=Role.USER)


@pytest.fixture
def other_user():
    return Principal(id=OTHER_USER_ID, role=Role.USER)


@pytest.fixture
def admin():
    return Principal(id=ADMIN_ID, role=Role.ADMIN)


@asynccontextmanager
async def _no_lifespan(app):
    yield


@pytest.fixture
def client(db):
    app = create_app(lifespan_handler=_no_lifespan)

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


def headers_for(user_id: int, role: str = "user") -> dict:
    return {"X-User-Id": str(user_id), "X-User-Role": role}


@pytest.fixture
def user_headers():
    return headers_for(USER_ID)


@pytest.fixture
def other_headers():
    return headers_for(OTHER_USER_ID)


@pytest.fixture
def admin_headers():
    return headers_for(ADMIN_ID, "admin")


@pytest.fixture
def now():
    return datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
