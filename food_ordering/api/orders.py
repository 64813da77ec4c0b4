"""
Orders API router
"""
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from food_ordering.api.deps import get_current_user
from food_ordering.core.database import get_db
from food_ordering.core.policy import ALL_ROLES, STAFF_ROLES, AccessPolicy, authorize
from food_ordering.models.order import OrderCreate, OrderResponse, OrderStatus
from food_ordering.models.user import User
from food_ordering.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])

PLACE_ORDER = AccessPolicy.of(*ALL_ROLES)
VIEW_ORDERS = AccessPolicy.of(*ALL_ROLES)
MANAGE_ORDER = AccessPolicy.of(*STAFF_ROLES, country_scoped=True)


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
def create_order(
    order_data: OrderCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> Any:
    """Place an order against a single restaurant"""
    authorize(PLACE_ORDER, current_user.role, current_user.country)
    return OrderService(db).create(order_data, current_user)


@router.get("", response_model=List[OrderResponse])
def list_orders(
    status: Optional[OrderStatus] = None,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> Any:
    """Orders visible to the caller, newest first"""
    authorize(VIEW_ORDERS, current_user.role, current_user.country)
    return OrderService(db).list_for(current_user, status=status)


@router.get("/{order_id}", response_model=OrderResponse)
def get_order(
    order_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> Any:
    authorize(VIEW_ORDERS, current_user.role, current_user.country)
    return OrderService(db).get(order_id, current_user)


@router.post("/{order_id}/checkout", response_model=OrderResponse)
def checkout_order(
    order_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> Any:
    """Confirm an order"""
    authorize(MANAGE_ORDER, current_user.role, current_user.country)
    return OrderService(db).checkout(order_id, current_user)


@router.delete("/{order_id}", response_model=OrderResponse)
def cancel_order(
    order_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> Any:
    """Cancel an order"""
    authorize(MANAGE_ORDER, current_user.role, current_user.country)
    return OrderService(db).cancel(order_id, current_user)
