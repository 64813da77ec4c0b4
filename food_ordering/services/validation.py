"""
Field checks shared by signup and user administration
"""
from typing import Optional

from pydantic.networks import validate_email

from food_ordering.core.exceptions import InvalidInput
from food_ordering.models.user import Country, UserRole

MIN_PASSWORD_LENGTH = 6


def normalize_email(email: Optional[str]) -> str:
    return (email or "").strip().lower()


def check_email(email: str) -> str:
    if not email:
        raise InvalidInput("Email is required")
    try:
        validate_email(email)
    except ValueError:
        raise InvalidInput("Invalid email format")
    return email


def check_password(password: Optional[str], label: str = "Password") -> str:
    if password is None or len(password) < MIN_PASSWORD_LENGTH:
        raise InvalidInput(f"{label} must be at least {MIN_PASSWORD_LENGTH} characters long")
    return password


def check_name(name: Optional[str]) -> str:
    if not name or not name.strip():
        raise InvalidInput("Name is required")
    return name.strip()


def parse_country(country) -> Country:
    try:
        return Country(country)
    except ValueError:
        raise InvalidInput("Country must be india or america")


def parse_role(role) -> UserRole:
    try:
        return UserRole(role)
    except ValueError:
        raise InvalidInput("Role must be admin, manager, or member")


def clean_optional(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None
