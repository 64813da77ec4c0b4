from food_ordering.models.user import User, UserRole, Country
from food_ordering.models.restaurant import Restaurant, MenuItem
from food_ordering.models.order import Order, OrderItem, OrderStatus

__all__ = [
    "User", "UserRole", "Country",
    "Restaurant", "MenuItem",
    "Order", "OrderItem", "OrderStatus",
]
