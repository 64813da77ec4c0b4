"""
Authentication service: signup, login and token resolution
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from food_ordering.core.database import transaction
from food_ordering.core.exceptions import Conflict, InvalidInput, Unauthorized
from food_ordering.core.security import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)
from food_ordering.models.user import User, UserCreate, UserRole
from food_ordering.services import validation

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


@dataclass
class AuthResult:
    access_token: str
    user: User


def token_claims(user: User) -> Dict[str, Any]:
    return {
        "sub": str(user.id),
        "email": user.email,
        "role": user.role.value,
        "country": user.country.value,
    }


def find_user_by_email(db: Session, email: str):
    return db.query(User).filter(func.lower(User.email) == validation.normalize_email(email)).first()


def build_user(db: Session, data: UserCreate) -> User:
    """Validate a signup-shaped payload and add the new user to the session.

    The duplicate check runs before any field validation so a registered
    email always yields Conflict.
    """
    email = validation.normalize_email(data.email)
    if email and find_user_by_email(db, email):
        raise Conflict("User with this email already exists")

    validation.check_email(email)
    validation.check_password(data.password)
    name = validation.check_name(data.name)
    country = validation.parse_country(data.country)
    role = validation.parse_role(data.role) if data.role else UserRole.MEMBER

    user = User(
        email=email,
        hashed_password=get_password_hash(data.password),
        name=name,
        role=role,
        country=country,
        payment_method=validation.clean_optional(data.payment_method),
    )
    db.add(user)
    return user


class AuthService:
    """Credential checks and token issuing"""

    def __init__(self, db: Session):
        self.db = db

    def signup(self, data: UserCreate) -> AuthResult:
        try:
            with transaction(self.db):
                user = build_user(self.db, data)
        except IntegrityError:
            # Lost a race against a concurrent signup for the same email
            raise Conflict("User with this email already exists")

        self.db.refresh(user)
        logger.info(f"Registered user {user.id} ({user.role.value}, {user.country.value})")
        return AuthResult(create_access_token(token_claims(user)), user)

    def login(self, email: str, password: str) -> AuthResult:
        if not email or not password:
            raise InvalidInput("Email and password are required")

        user = find_user_by_email(self.db, email)
        if not user or not verify_password(password, user.hashed_password):
            logger.info("Rejected login attempt")
            raise Unauthorized(INVALID_CREDENTIALS)

        return AuthResult(create_access_token(token_claims(user)), user)

    def resolve_user(self, token: str) -> User:
        """Map a bearer token back to a stored user"""
        payload = decode_access_token(token)
        try:
            user_id = int(payload["sub"])
        except (TypeError, ValueError):
            raise Unauthorized("Invalid or expired token")

        user = self.db.get(User, user_id)
        if user is None:
            raise Unauthorized("User not found")
        return user
