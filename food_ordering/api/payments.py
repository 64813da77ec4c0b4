"""
Payment method API router
"""
from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from food_ordering.api.deps import get_current_user
from food_ordering.core.database import get_db
from food_ordering.core.policy import AccessPolicy, authorize
from food_ordering.models.user import PaymentMethodUpdate, User, UserResponse, UserRole
from food_ordering.services.payment_service import PaymentService

router = APIRouter(prefix="/payments", tags=["payments"])

UPDATE_PAYMENT_METHOD = AccessPolicy.of(UserRole.ADMIN)


@router.put("/paymentMethod", response_model=UserResponse)
def update_payment_method(
    update: PaymentMethodUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> Any:
    """Replace the caller's stored payment method"""
    authorize(UPDATE_PAYMENT_METHOD, current_user.role, current_user.country)
    return PaymentService(db).update_payment_method(current_user, update.payment_method)
