from food_ordering.client.api import ApiError, OrderingClient
from food_ordering.client.cart import Cart, CartLine

__all__ = ["ApiError", "OrderingClient", "Cart", "CartLine"]
