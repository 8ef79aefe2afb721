# storefront/services/price_service.py
from decimal import Decimal, ROUND_HALF_UP

from sqlalchemy.orm import Session

from storefront.data.models.price import PriceModel
from storefront.domain.errors import PriceRecordNotFound, ValidationError
from storefront.domain.schemas import PriceIn, PriceUpdate
from storefront.repos.price_repo import PriceRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def discount_percentage(original: Decimal, discounted: Decimal) -> Decimal:
    if original <= 0:
        return Decimal("0.00")
    pct = (original - discounted) / original * 100
    return pct.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def _check_prices(original: Decimal, discounted: Decimal) -> None:
    if original <= 0 or discounted <= 0:
        raise ValidationError("Prices must be greater than 0")
    if discounted >= original:
        raise ValidationError("Discounted price must be less than original price")


class PriceService:
    """Standalone discount configurations, not consulted when orders are placed."""

    def __init__(self, db: Session):
        self.repo = PriceRepo(db)

    def list_prices(self) -> list[PriceModel]:
        return self.repo.list_prices(active_only=True)

    def get_price(self, price_id: int) -> PriceModel:
        price = self.repo.get_price(price_id)
        if not price:
            raise PriceRecordNotFound(price_id)
        return price

    def add_price(self, payload: PriceIn) -> PriceModel:
        _check_prices(payload.original_price, payload.discounted_price)

        price = PriceModel(
            name=payload.name,
            description=payload.description,
            original_price=payload.original_price,
            discounted_price=payload.discounted_price,
            discount_percentage=discount_percentage(payload.original_price, payload.discounted_price),
            is_active=True,
        )
        created = self.repo.create_price(price)
        logger.info(f"Price record {created.id} '{created.name}' added")
        return created

    def update_price(self, price_id: int, payload: PriceUpdate) -> PriceModel:
        price = self.get_price(price_id)

        original = payload.original_price if payload.original_price is not None else Decimal(price.original_price)
        discounted = payload.discounted_price if payload.discounted_price is not None else Decimal(price.discounted_price)
        _check_prices(original, discounted)

        if payload.name is not None:
            price.name = payload.name
        if payload.description is not None:
            price.description = payload.description
        if payload.is_active is not None:
            price.is_active = payload.is_active
        price.original_price = original
        price.discounted_price = discounted
        price.discount_percentage = discount_percentage(original, discounted)

        saved = self.repo.save_price(price)
        logger.info(f"Price record {price_id} updated")
        return saved

    def deactivate_price(self, price_id: int) -> PriceModel:
        price = self.get_price(price_id)
        price.is_active = False
        saved = self.repo.save_price(price)
        logger.info(f"Price record {price_id} deactivated")
        return saved
