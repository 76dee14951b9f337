from models.users import User
from models.orders import Order
from models.order_items import OrderItem
from models.products import Product

__all__ = ["User", "Order", "OrderItem", "Product"]
