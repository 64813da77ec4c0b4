"""
Restaurant catalog API router
"""
from typing import Any, List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from food_ordering.api.deps import get_current_user
from food_ordering.core.database import get_db
from food_ordering.core.policy import ALL_ROLES, AccessPolicy, authorize
from food_ordering.models.restaurant import MenuItemResponse, RestaurantResponse
from food_ordering.models.user import User, UserRole
from food_ordering.services.catalog_service import CatalogService

router = APIRouter(prefix="/restaurants", tags=["restaurants"])

LIST_RESTAURANTS = AccessPolicy.of(*ALL_ROLES, country_scoped=True)
VIEW_RESTAURANT = AccessPolicy.of(*ALL_ROLES)


@router.get("", response_model=List[RestaurantResponse])
def list_restaurants(
    country: Optional[str] = None,
    search: Optional[str] = None,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> Any:
    """Restaurants of the caller's country; admins may pick any country or all"""
    authorize(LIST_RESTAURANTS, current_user.role, current_user.country, resource_country=country)

    if current_user.role != UserRole.ADMIN:
        country = current_user.country.value
    return CatalogService(db).find_by_country(country, search=search)


@router.get("/{restaurant_id}", response_model=RestaurantResponse)
def get_restaurant(
    restaurant_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> Any:
    authorize(VIEW_RESTAURANT, current_user.role, current_user.country)
    return CatalogService(db).get_restaurant(restaurant_id, current_user)


@router.get("/{restaurant_id}/menu", response_model=List[MenuItemResponse])
def get_menu(
    restaurant_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> Any:
    """Available menu items of a restaurant"""
    authorize(VIEW_RESTAURANT, current_user.role, current_user.country)
    return CatalogService(db).get_menu_items(restaurant_id, current_user)
