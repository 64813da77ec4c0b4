"""
Client-side cart: an in-memory aggregation of menu selections for one
session. Nothing is persisted and nothing is reconciled with the server;
the cart only turns into orders when submitted, one order per restaurant.
"""
from collections import OrderedDict
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional, Tuple

CartKey = Tuple[int, int]  # (restaurant id, menu item id)


@dataclass
class CartLine:
    item: Mapping[str, Any]
    restaurant: Mapping[str, Any]
    quantity: int = 1

    @property
    def key(self) -> CartKey:
        return (self.restaurant["id"], self.item["id"])

    @property
    def unit_price(self) -> Decimal:
        return Decimal(str(self.item["price"]))

    @property
    def subtotal(self) -> Decimal:
        return self.unit_price * self.quantity


@dataclass
class RestaurantGroup:
    restaurant: Mapping[str, Any]
    lines: List[CartLine] = field(default_factory=list)

    @property
    def total(self) -> Decimal:
        return sum((line.subtotal for line in self.lines), Decimal("0"))


class Cart:
    """Selections keyed by (restaurant, item), kept in insertion order"""

    def __init__(self):
        self._lines: "OrderedDict[CartKey, CartLine]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self):
        return iter(list(self._lines.values()))

    @property
    def lines(self) -> List[CartLine]:
        return list(self._lines.values())

    def is_empty(self) -> bool:
        return not self._lines

    def _find(self, item_id: int, restaurant_id: Optional[int] = None) -> Optional[CartLine]:
        if restaurant_id is not None:
            return self._lines.get((restaurant_id, item_id))
        for line in self._lines.values():
            if line.item["id"] == item_id:
                return line
        return None

    def add(self, item: Mapping[str, Any], restaurant: Mapping[str, Any], quantity: int = 1) -> CartLine:
        if quantity <= 0:
            raise ValueError("quantity must be positive")
        key = (restaurant["id"], item["id"])
        line = self._lines.get(key)
        if line is None:
            line = CartLine(item=item, restaurant=restaurant, quantity=quantity)
            self._lines[key] = line
        else:
            line.quantity += quantity
        return line

    def remove(self, item_id: int, restaurant_id: Optional[int] = None) -> None:
        """Take one unit off a line; the line goes away at zero"""
        line = self._find(item_id, restaurant_id)
        if line is None:
            return
        if line.quantity > 1:
            line.quantity -= 1
        else:
            del self._lines[line.key]

    def update_quantity(self, item_id: int, quantity: int, restaurant_id: Optional[int] = None) -> None:
        line = self._find(item_id, restaurant_id)
        if line is None:
            return
        if quantity <= 0:
            del self._lines[line.key]
        else:
            line.quantity = quantity

    def clear(self) -> None:
        self._lines.clear()

    def item_quantity(self, item_id: int, restaurant_id: Optional[int] = None) -> int:
        line = self._find(item_id, restaurant_id)
        return line.quantity if line else 0

    def total_items(self) -> int:
        return sum(line.quantity for line in self._lines.values())

    def total_amount(self) -> Decimal:
        return sum((line.subtotal for line in self._lines.values()), Decimal("0"))

    def group_by_restaurant(self) -> Dict[int, RestaurantGroup]:
        groups: Dict[int, RestaurantGroup] = OrderedDict()
        for line in self._lines.values():
            restaurant_id = line.restaurant["id"]
            if restaurant_id not in groups:
                groups[restaurant_id] = RestaurantGroup(restaurant=line.restaurant)
            groups[restaurant_id].lines.append(line)
        return groups

    def to_order_requests(self, delivery_address: str) -> List[Dict[str, Any]]:
        """One order payload per restaurant, in the API's JSON shape"""
        return [
            {
                "restaurantId": restaurant_id,
                "items": [
                    {"menuItemId": line.item["id"], "quantity": line.quantity}
                    for line in group.lines
                ],
                "deliveryAddress": delivery_address,
            }
            for restaurant_id, group in self.group_by_restaurant().items()
        ]
