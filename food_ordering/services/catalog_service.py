"""
Restaurant catalog service
"""
import logging
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from food_ordering.core.exceptions import Forbidden, InvalidInput, NotFound
from food_ordering.core.policy import can_access_country
from food_ordering.models.restaurant import MenuItem, Restaurant
from food_ordering.models.user import Country, User

logger = logging.getLogger(__name__)


class CatalogService:
    """Country-filtered restaurant and menu lookups"""

    def __init__(self, db: Session):
        self.db = db

    def find_by_country(self, country: Optional[str] = None, search: Optional[str] = None) -> List[Restaurant]:
        query = self.db.query(Restaurant)

        if country:
            try:
                country = Country(country)
            except ValueError:
                raise InvalidInput(f"Invalid country: {country}")
            query = query.filter(Restaurant.country == country)

        if search and search.strip():
            pattern = f"%{search.strip()}%"
            query = query.filter(
                or_(
                    Restaurant.name.ilike(pattern),
                    Restaurant.description.ilike(pattern),
                )
            )

        return query.order_by(Restaurant.name.asc(), Restaurant.id.asc()).all()

    def get_restaurant(self, restaurant_id: int, caller: User) -> Restaurant:
        restaurant = self.db.get(Restaurant, restaurant_id)
        if restaurant is None:
            raise NotFound("Restaurant not found")

        if not can_access_country(caller.role, caller.country, restaurant.country):
            logger.warning(f"User {caller.id} denied restaurant {restaurant_id} in {restaurant.country.value}")
            raise Forbidden("Access denied: Country restriction")
        return restaurant

    def get_menu_items(self, restaurant_id: int, caller: User) -> List[MenuItem]:
        """Available items of a restaurant the caller may see"""
        restaurant = self.get_restaurant(restaurant_id, caller)
        return (
            self.db.query(MenuItem)
            .filter(
                MenuItem.restaurant_id == restaurant.id,
                MenuItem.available.is_(True),
            )
            .order_by(MenuItem.category.asc(), MenuItem.name.asc())
            .all()
        )
