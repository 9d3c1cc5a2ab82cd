# all models imported here so SQLAlchemy registers them in Base.metadata

from order_core.data.models.user import UserModel
from order_core.data.models.product import ProductModel
from order_core.data.models.cart_item import CartItemModel
from order_core.data.models.order import OrderModel
from order_core.data.models.order_item import OrderItemModel
from order_core.data.models.marketing import BannerModel, CouponModel

__all__ = [
    "UserModel",
    "ProductModel",
    "CartItemModel",
    "OrderModel",
    "OrderItemModel",
    "BannerModel",
    "CouponModel",
]
