from .cart import Cart
from .cart_item import CartItem
from .order import Order
from .order_item import OrderItem

__all__ = ["Cart", "CartItem", "Order", "OrderItem"]
