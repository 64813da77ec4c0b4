"""
Stored payment method updates
"""
import logging

from sqlalchemy.orm import Session

from food_ordering.core.database import transaction
from food_ordering.core.exceptions import InvalidInput, NotFound
from food_ordering.models.user import User

logger = logging.getLogger(__name__)


class PaymentService:

    def __init__(self, db: Session):
        self.db = db

    def update_payment_method(self, caller: User, payment_method: str) -> User:
        payment_method = (payment_method or "").strip()
        if not payment_method:
            raise InvalidInput("Payment method is required")

        with transaction(self.db):
            user = self.db.get(User, caller.id)
            if user is None:
                raise NotFound("User not found")
            user.payment_method = payment_method

        self.db.refresh(user)
        logger.info(f"User {user.id} updated stored payment method")
        return user
