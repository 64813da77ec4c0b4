"""
Order management data models and database schemas
"""
import enum
from datetime import datetime
from typing import List, Optional

from sqlalchemy import Column, Integer, String, DateTime, Numeric, Text, ForeignKey, Enum
from sqlalchemy.orm import relationship
from food_ordering.core.database import Base
from food_ordering.models.common import APIModel
from food_ordering.models.restaurant import MenuItemBrief, RestaurantResponse
from food_ordering.models.user import UserSummary, enum_values

# Enums

# preparing/delivered are reserved: no operation writes them yet
class OrderStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

# Database Models

class Order(Base):
    """Order database model"""
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id"), nullable=False, index=True)

    total_amount = Column(Numeric(10, 2), nullable=False)
    delivery_address = Column(Text, nullable=False)
    status = Column(
        Enum(OrderStatus, values_callable=enum_values, native_enum=False, length=20),
        nullable=False,
        default=OrderStatus.PENDING,
    )

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    user = relationship("User", back_populates="orders")
    restaurant = relationship("Restaurant", back_populates="orders")
    items = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.id",
    )

class OrderItem(Base):
    """Order line; price is a snapshot of the menu price at order time"""
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    menu_item_id = Column(Integer, ForeignKey("menu_items.id"), nullable=False)
    quantity = Column(Integer, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)

    # Relationships
    order = relationship("Order", back_populates="items")
    menu_item = relationship("MenuItem")

# Pydantic Models for API

class OrderItemCreate(APIModel):
    menu_item_id: int
    quantity: int

class OrderCreate(APIModel):
    restaurant_id: int
    items: List[OrderItemCreate] = []
    delivery_address: Optional[str] = None

class OrderItemResponse(APIModel):
    id: int
    menu_item_id: int
    quantity: int
    price: float
    menu_item: Optional[MenuItemBrief] = None

class OrderResponse(APIModel):
    id: int
    user_id: int
    restaurant_id: int
    total_amount: float
    delivery_address: str
    status: OrderStatus
    created_at: datetime
    updated_at: datetime
    items: List[OrderItemResponse] = []
    restaurant: Optional[RestaurantResponse] = None
    user: Optional[UserSummary] = None
