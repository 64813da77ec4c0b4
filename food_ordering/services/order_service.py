"""
Order workflow: placement, confirmation, cancellation and listing.

Every write runs inside one database transaction. Totals come from the live
menu price at creation time and each line keeps a copy of that price, so
later catalog edits never change a placed order.
"""
import logging
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.orm import Session, joinedload

from food_ordering.core.database import transaction
from food_ordering.core.exceptions import Forbidden, InvalidInput, NotFound
from food_ordering.core.policy import can_access_country
from food_ordering.models.order import Order, OrderCreate, OrderItem, OrderStatus
from food_ordering.models.restaurant import MenuItem, Restaurant
from food_ordering.models.user import User, UserRole

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


def _order_query(db: Session):
    return db.query(Order).options(
        joinedload(Order.user),
        joinedload(Order.restaurant),
        joinedload(Order.items).joinedload(OrderItem.menu_item).joinedload(MenuItem.restaurant),
    )


def order_country(order: Order):
    """Country of an order, taken from its first line's restaurant.

    Returns None for an order without lines; callers treat that as
    unresolvable rather than as a match.
    """
    if not order.items:
        return None
    first = order.items[0]
    if first.menu_item is None or first.menu_item.restaurant is None:
        return None
    return first.menu_item.restaurant.country


class OrderService:
    """Order placement and state transitions"""

    def __init__(self, db: Session):
        self.db = db

    def _load(self, order_id: int) -> Order:
        order = _order_query(self.db).filter(Order.id == order_id).first()
        if order is None:
            raise NotFound("Order not found")
        return order

    def create(self, data: OrderCreate, caller: User) -> Order:
        with transaction(self.db):
            restaurant = self.db.get(Restaurant, data.restaurant_id)
            if restaurant is None:
                raise NotFound(f"Restaurant {data.restaurant_id} not found")

            if not can_access_country(caller.role, caller.country, restaurant.country):
                logger.warning(f"User {caller.id} denied ordering from restaurant {restaurant.id}")
                raise Forbidden("Cannot order from restaurants in other countries")

            if not data.items:
                raise InvalidInput("Order must contain at least one item")

            delivery_address = (data.delivery_address or "").strip()
            if not delivery_address:
                raise InvalidInput("Delivery address is required")

            total = Decimal("0.00")
            lines = []
            for item in data.items:
                menu_item = (
                    self.db.query(MenuItem)
                    .filter(
                        MenuItem.id == item.menu_item_id,
                        MenuItem.restaurant_id == restaurant.id,
                    )
                    .first()
                )
                if menu_item is None:
                    raise NotFound(f"Menu item {item.menu_item_id} not found in restaurant {restaurant.id}")

                if item.quantity <= 0:
                    raise InvalidInput("Item quantity must be greater than 0")

                if not menu_item.available:
                    raise InvalidInput(f"Menu item {menu_item.id} is currently unavailable")

                price = Decimal(str(menu_item.price)).quantize(CENT)
                total += price * item.quantity
                lines.append(OrderItem(menu_item_id=menu_item.id, quantity=item.quantity, price=price))

            order = Order(
                user_id=caller.id,
                restaurant_id=restaurant.id,
                total_amount=total,
                delivery_address=delivery_address,
                status=OrderStatus.PENDING,
                items=lines,
            )
            self.db.add(order)
            self.db.flush()  # Get order ID
            order_id = order.id

        logger.info(f"User {caller.id} placed order {order_id} at restaurant {data.restaurant_id} for {total}")
        return self._load(order_id)

    def _authorize_transition(self, order: Order, caller: User, verb: str) -> None:
        if caller.role == UserRole.MEMBER:
            raise Forbidden(f"Members cannot {verb} orders")

        if caller.role != UserRole.ADMIN:
            country = order_country(order)
            if not can_access_country(caller.role, caller.country, country):
                logger.warning(f"User {caller.id} denied {verb} of order {order.id} (country {country})")
                raise Forbidden(f"Cannot {verb} orders from other countries")

    def _transition(self, order_id: int, caller: User, target: OrderStatus, verb: str) -> Order:
        with transaction(self.db):
            order = self._load(order_id)
            self._authorize_transition(order, caller, verb)

            if order.status == target:
                return order

            previous = order.status
            order.status = target

        logger.info(f"Order {order_id} moved {previous.value} -> {target.value} by user {caller.id}")
        return self._load(order_id)

    def checkout(self, order_id: int, caller: User) -> Order:
        """Confirm an order; confirming a confirmed order is a no-op"""
        return self._transition(order_id, caller, OrderStatus.CONFIRMED, "checkout")

    def cancel(self, order_id: int, caller: User) -> Order:
        """Cancel an order; cancelling a cancelled order is a no-op"""
        return self._transition(order_id, caller, OrderStatus.CANCELLED, "cancel")

    def list_for(self, caller: User, status: Optional[OrderStatus] = None) -> List[Order]:
        query = _order_query(self.db)

        if caller.role == UserRole.MANAGER:
            # Scoped by the order owner's country
            query = query.join(User, Order.user_id == User.id).filter(User.country == caller.country)
        elif caller.role != UserRole.ADMIN:
            query = query.filter(Order.user_id == caller.id)

        if status is not None:
            query = query.filter(Order.status == status)

        return query.order_by(Order.created_at.desc(), Order.id.desc()).all()

    def get(self, order_id: int, caller: User) -> Order:
        order = self._load(order_id)

        if caller.role == UserRole.MEMBER:
            if order.user_id != caller.id:
                raise Forbidden("Cannot view orders of other users")
        elif not can_access_country(caller.role, caller.country, order.restaurant.country):
            raise Forbidden("Cannot view orders from other countries")
        return order
