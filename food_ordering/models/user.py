"""
User data models and database schemas
"""
import enum
from typing import List, Optional

from pydantic import Field
from sqlalchemy import Column, Integer, String, Enum
from sqlalchemy.orm import relationship
from food_ordering.core.database import Base
from food_ordering.models.common import APIModel

# Enums

class UserRole(str, enum.Enum):
    ADMIN = "admin"
    MANAGER = "manager"
    MEMBER = "member"

class Country(str, enum.Enum):
    INDIA = "india"
    AMERICA = "america"


def enum_values(enum_cls):
    return [member.value for member in enum_cls]

# Database Models

class User(Base):
    """User database model"""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)  # stored lower-cased
    hashed_password = Column(String(255), nullable=False)
    name = Column(String(255), nullable=False)
    role = Column(
        Enum(UserRole, values_callable=enum_values, native_enum=False, length=20),
        nullable=False,
        default=UserRole.MEMBER,
    )
    country = Column(
        Enum(Country, values_callable=enum_values, native_enum=False, length=20),
        nullable=False,
    )
    payment_method = Column(String(255))

    # Relationships
    orders = relationship("Order", back_populates="user", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<User {self.id} {self.email} {self.role.value}/{self.country.value}>"

# Pydantic Models for API

class UserResponse(APIModel):
    id: int
    email: str
    name: str
    role: UserRole
    country: Country
    payment_method: Optional[str] = None

class UserSummary(APIModel):
    id: int
    email: str
    name: str
    country: Country

class UserCreate(APIModel):
    """Signup / admin create payload; validated by the service so the
    duplicate-email check always runs first"""
    email: Optional[str] = None
    password: Optional[str] = None
    name: Optional[str] = None
    role: Optional[str] = None
    country: Optional[str] = None
    payment_method: Optional[str] = None

class UserUpdate(APIModel):
    name: Optional[str] = None
    payment_method: Optional[str] = None
    role: Optional[str] = None
    country: Optional[str] = None

class ProfileUpdate(APIModel):
    name: Optional[str] = None
    payment_method: Optional[str] = None

class PaymentMethodUpdate(APIModel):
    payment_method: Optional[str] = None

class RoleUpdate(APIModel):
    role: str

class ChangePasswordRequest(APIModel):
    current_password: str
    new_password: str

class UserPage(APIModel):
    users: List[UserResponse]
    total: int
    page: int
    limit: int

class RoleCount(APIModel):
    role: UserRole
    count: int

class CountryCount(APIModel):
    country: Country
    count: int

class UserStats(APIModel):
    total_users: int
    users_by_role: List[RoleCount]
    users_by_country: List[CountryCount]

# Authentication Models

class LoginRequest(APIModel):
    email: Optional[str] = None
    password: Optional[str] = None

class AuthData(APIModel):
    # web client reads the snake_case key
    access_token: str = Field(alias="access_token")
    user: UserResponse

class TokenClaims(APIModel):
    user_id: int
    email: str
    role: UserRole
    country: Country
