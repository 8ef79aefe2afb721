# import wszystkich modeli zeby SQLAlchemy zarejestrowal je w Base.metadata

from storefront.data.models.item import ItemModel
from storefront.data.models.order import OrderModel
from storefront.data.models.order_item import OrderItemModel
from storefront.data.models.price import PriceModel

__all__ = ["ItemModel", "OrderModel", "OrderItemModel", "PriceModel"]
