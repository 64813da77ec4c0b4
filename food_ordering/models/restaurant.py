"""
Restaurant catalog data models and database schemas
"""
from decimal import Decimal
from typing import Optional

from sqlalchemy import Column, Integer, String, Boolean, Numeric, Text, ForeignKey, Enum
from sqlalchemy.orm import relationship
from food_ordering.core.database import Base
from food_ordering.models.common import APIModel
from food_ordering.models.user import Country, enum_values

# Database Models

class Restaurant(Base):
    """Restaurant database model"""
    __tablename__ = "restaurants"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    address = Column(Text, nullable=False, default="")
    image = Column(String(500), nullable=False, default="")
    country = Column(
        Enum(Country, values_callable=enum_values, native_enum=False, length=20),
        nullable=False,
        default=Country.INDIA,
        index=True,
    )
    rating = Column(Numeric(2, 1), nullable=False, default=Decimal("4.0"))  # 0 - 5

    # Relationships
    menu_items = relationship("MenuItem", back_populates="restaurant", cascade="all, delete-orphan")
    orders = relationship("Order", back_populates="restaurant")

class MenuItem(Base):
    """Menu item database model"""
    __tablename__ = "menu_items"

    id = Column(Integer, primary_key=True, index=True)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    price = Column(Numeric(10, 2), nullable=False)
    image = Column(String(500), nullable=False, default="")
    category = Column(String(100), nullable=False, default="")
    available = Column(Boolean, nullable=False, default=True)

    # Relationships
    restaurant = relationship("Restaurant", back_populates="menu_items")

# Pydantic Models for API

class RestaurantResponse(APIModel):
    id: int
    name: str
    description: str
    address: str
    image: str
    country: Country
    rating: float

class MenuItemResponse(APIModel):
    id: int
    restaurant_id: int
    name: str
    description: str
    price: float
    image: str
    category: str
    available: bool

class MenuItemBrief(APIModel):
    id: int
    name: str
    price: float
    category: str
    image: Optional[str] = None
