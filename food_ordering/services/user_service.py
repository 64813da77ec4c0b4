"""
User administration: listing, search, profile edits, role changes and removal
"""
import logging
from typing import Any, Dict, Optional

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from food_ordering.core.database import transaction
from food_ordering.core.exceptions import Conflict, Forbidden, InvalidInput, NotFound, Unauthorized
from food_ordering.core.policy import can_access_country
from food_ordering.core.security import get_password_hash, verify_password
from food_ordering.models.user import (
    ProfileUpdate, User, UserCreate, UserRole, UserUpdate,
)
from food_ordering.services import validation
from food_ordering.services.auth_service import build_user

logger = logging.getLogger(__name__)


class UserService:
    """User management on behalf of an authenticated caller"""

    def __init__(self, db: Session):
        self.db = db

    # Helpers

    def _get(self, user_id: int) -> User:
        if not user_id or user_id <= 0:
            raise InvalidInput("Invalid user ID")
        user = self.db.get(User, user_id)
        if user is None:
            raise NotFound("User not found")
        return user

    def _scoped_query(self, caller: User):
        query = self.db.query(User)
        if caller.role != UserRole.ADMIN:
            query = query.filter(User.country == caller.country)
        return query

    def _check_scope(self, caller: User, user: User) -> None:
        if not can_access_country(caller.role, caller.country, user.country):
            raise Forbidden("Access denied: Country restriction")

    # Queries

    def list_users(self, caller: User, page: int = 1, limit: int = 10,
                   role: Optional[str] = None, country: Optional[str] = None) -> Dict[str, Any]:
        page, limit = max(page, 1), max(limit, 1)
        query = self._scoped_query(caller)

        if role:
            query = query.filter(User.role == validation.parse_role(role))
        if country:
            query = query.filter(User.country == validation.parse_country(country))

        total = query.count()
        users = query.order_by(User.id.desc()).offset((page - 1) * limit).limit(limit).all()
        return {"users": users, "total": total, "page": page, "limit": limit}

    def search(self, caller: User, term: Optional[str], page: int = 1, limit: int = 10) -> Dict[str, Any]:
        if not term or not term.strip():
            raise InvalidInput("Search term is required")

        page, limit = max(page, 1), max(limit, 1)
        pattern = f"%{term.strip()}%"
        query = self._scoped_query(caller).filter(
            or_(User.name.ilike(pattern), User.email.ilike(pattern))
        )
        total = query.count()
        users = query.order_by(User.name.asc()).offset((page - 1) * limit).limit(limit).all()
        return {"users": users, "total": total, "page": page, "limit": limit}

    def stats(self) -> Dict[str, Any]:
        total_users = self.db.query(func.count(User.id)).scalar()
        by_role = self.db.query(User.role, func.count(User.id)).group_by(User.role).all()
        by_country = self.db.query(User.country, func.count(User.id)).group_by(User.country).all()
        return {
            "total_users": total_users,
            "users_by_role": [{"role": role, "count": count} for role, count in by_role],
            "users_by_country": [{"country": country, "count": count} for country, count in by_country],
        }

    def get(self, caller: User, user_id: int) -> User:
        user = self._get(user_id)
        self._check_scope(caller, user)
        return user

    # Mutations

    def create(self, caller: User, data: UserCreate) -> User:
        if caller.role == UserRole.MANAGER:
            if data.role and data.role != UserRole.MEMBER.value:
                raise Forbidden("Managers can only create members")
            if data.country and data.country != caller.country.value:
                raise Forbidden("Access denied: Country restriction")
            data = data.model_copy(update={"role": UserRole.MEMBER.value, "country": caller.country.value})

        try:
            with transaction(self.db):
                user = build_user(self.db, data)
        except IntegrityError:
            raise Conflict("User with this email already exists")

        self.db.refresh(user)
        logger.info(f"User {caller.id} created user {user.id}")
        return user

    def update(self, caller: User, user_id: int, data: UserUpdate) -> User:
        user = self.get(caller, user_id)
        changes = data.model_dump(exclude_unset=True)

        if ("role" in changes or "country" in changes) and caller.role != UserRole.ADMIN:
            raise Forbidden("Only admins can change role or country")

        with transaction(self.db):
            if "name" in changes:
                user.name = validation.check_name(changes["name"])
            if "payment_method" in changes:
                user.payment_method = validation.clean_optional(changes["payment_method"])
            if changes.get("role") is not None:
                user.role = validation.parse_role(changes["role"])
            if changes.get("country") is not None:
                user.country = validation.parse_country(changes["country"])

        self.db.refresh(user)
        logger.info(f"User {caller.id} updated user {user.id}")
        return user

    def update_profile(self, caller: User, data: ProfileUpdate) -> User:
        changes = data.model_dump(exclude_unset=True)
        with transaction(self.db):
            if "name" in changes:
                caller.name = validation.check_name(changes["name"])
            if "payment_method" in changes:
                caller.payment_method = validation.clean_optional(changes["payment_method"])

        self.db.refresh(caller)
        return caller

    def update_role(self, caller: User, user_id: int, role: str) -> User:
        new_role = validation.parse_role(role)
        with transaction(self.db):
            user = self._get(user_id)
            user.role = new_role

        self.db.refresh(user)
        logger.info(f"User {caller.id} changed role of user {user.id} to {new_role.value}")
        return user

    def change_password(self, caller: User, current_password: str, new_password: str) -> None:
        if not verify_password(current_password or "", caller.hashed_password):
            raise Unauthorized("Current password is incorrect")
        validation.check_password(new_password, label="New password")

        with transaction(self.db):
            caller.hashed_password = get_password_hash(new_password)
        logger.info(f"User {caller.id} changed password")

    def remove(self, caller: User, user_id: int) -> None:
        with transaction(self.db):
            user = self._get(user_id)
            self.db.delete(user)
        logger.info(f"User {caller.id} removed user {user_id}")
