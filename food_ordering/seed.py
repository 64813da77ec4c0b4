"""
Demo data: users of every role in both countries, four restaurants and
their menus. Seeding is idempotent; existing rows are matched by email,
restaurant name, or (restaurant, item name).
"""
import logging
from decimal import Decimal
from typing import Dict

from sqlalchemy.orm import Session

from food_ordering.core.database import transaction
from food_ordering.core.security import get_password_hash
from food_ordering.models.restaurant import MenuItem, Restaurant
from food_ordering.models.user import Country, User, UserRole

logger = logging.getLogger(__name__)

USERS = [
    {"email": "nick.fury@shield.com", "password": "admin123", "name": "Nick Fury",
     "role": UserRole.ADMIN, "country": Country.AMERICA, "payment_method": "Credit Card **** 1234"},
    {"email": "captain.marvel@shield.com", "password": "manager123", "name": "Captain Marvel",
     "role": UserRole.MANAGER, "country": Country.INDIA},
    {"email": "captain.america@shield.com", "password": "manager123", "name": "Captain America",
     "role": UserRole.MANAGER, "country": Country.AMERICA},
    {"email": "thanos@shield.com", "password": "member123", "name": "Thanos",
     "role": UserRole.MEMBER, "country": Country.INDIA},
    {"email": "thor@shield.com", "password": "member123", "name": "Thor",
     "role": UserRole.MEMBER, "country": Country.INDIA},
    {"email": "travis@shield.com", "password": "member123", "name": "Travis",
     "role": UserRole.MEMBER, "country": Country.AMERICA},
]

RESTAURANTS = [
    {"name": "Spice Palace", "description": "Authentic Indian cuisine with traditional spices",
     "image": "https://images.unsplash.com/photo-1565557623262-b51c2513a641?w=400",
     "country": Country.INDIA, "rating": Decimal("4.5"), "address": "123 Delhi Road, Mumbai"},
    {"name": "Curry House", "description": "Modern Indian dining experience",
     "image": "https://images.unsplash.com/photo-1631452180519-c014fe946bc7?w=400",
     "country": Country.INDIA, "rating": Decimal("4.2"), "address": "456 Bangalore Street, Pune"},
    {"name": "American Diner", "description": "Classic American comfort food",
     "image": "https://images.unsplash.com/photo-1550547660-d9450f859349?w=400",
     "country": Country.AMERICA, "rating": Decimal("4.0"), "address": "789 Main Street, New York"},
    {"name": "Burger Junction", "description": "Gourmet burgers and fries",
     "image": "https://images.unsplash.com/photo-1568901346375-23c9450c58cd?w=400",
     "country": Country.AMERICA, "rating": Decimal("4.3"), "address": "321 Broadway, Los Angeles"},
]

MENU_ITEMS = [
    ("Spice Palace", "Butter Chicken", "Creamy tomato-based curry with tender chicken", "12.99", "Main Course",
     "https://images.unsplash.com/photo-1588166524941-3bf61a9c41db?w=400"),
    ("Spice Palace", "Biryani", "Fragrant basmati rice with spiced meat", "14.99", "Main Course",
     "https://images.unsplash.com/photo-1563379091339-03246963d51a?w=400"),
    ("Spice Palace", "Naan Bread", "Fresh baked Indian bread", "3.99", "Sides",
     "https://images.unsplash.com/photo-1619221582174-de3708e2ad1c?w=400"),
    ("Curry House", "Paneer Tikka", "Grilled cottage cheese with spices", "11.99", "Appetizer",
     "https://images.unsplash.com/photo-1567188040759-fb8a883dc6d8?w=400"),
    ("Curry House", "Dal Makhani", "Rich and creamy black lentil curry", "9.99", "Main Course",
     "https://images.unsplash.com/photo-1546833999-b9f581a1996d?w=400"),
    ("American Diner", "Classic Burger", "Beef patty with lettuce, tomato, and cheese", "13.99", "Main Course",
     "https://images.unsplash.com/photo-1568901346375-23c9450c58cd?w=400"),
    ("American Diner", "French Fries", "Crispy golden fries", "4.99", "Sides",
     "https://images.unsplash.com/photo-1573080496219-bb080dd4f877?w=400"),
    ("American Diner", "Milkshake", "Creamy vanilla milkshake", "5.99", "Beverages",
     "https://images.unsplash.com/photo-1572490122747-3968b75cc699?w=400"),
    ("Burger Junction", "BBQ Bacon Burger", "Beef patty with BBQ sauce and crispy bacon", "15.99", "Main Course",
     "https://images.unsplash.com/photo-1553979459-d2229ba7433a?w=400"),
    ("Burger Junction", "Chicken Wings", "Spicy buffalo wings with ranch dip", "8.99", "Appetizer",
     "https://images.unsplash.com/photo-1527477396000-e27163b481c2?w=400"),
]


def seed_database(db: Session) -> Dict[str, int]:
    """Insert missing demo rows and report how many were created"""
    created = {"users": 0, "restaurants": 0, "menu_items": 0}

    with transaction(db):
        for data in USERS:
            if db.query(User).filter(User.email == data["email"]).first():
                continue
            fields = {key: value for key, value in data.items() if key != "password"}
            db.add(User(hashed_password=get_password_hash(data["password"]), **fields))
            created["users"] += 1

        restaurants = {}
        for data in RESTAURANTS:
            restaurant = db.query(Restaurant).filter(Restaurant.name == data["name"]).first()
            if restaurant is None:
                restaurant = Restaurant(**data)
                db.add(restaurant)
                created["restaurants"] += 1
            restaurants[data["name"]] = restaurant
        db.flush()

        for restaurant_name, name, description, price, category, image in MENU_ITEMS:
            restaurant = restaurants[restaurant_name]
            exists = db.query(MenuItem).filter(
                MenuItem.restaurant_id == restaurant.id,
                MenuItem.name == name,
            ).first()
            if exists:
                continue
            db.add(MenuItem(
                restaurant_id=restaurant.id,
                name=name,
                description=description,
                price=Decimal(price),
                category=category,
                image=image,
                available=True,
            ))
            created["menu_items"] += 1

    logger.info(f"Seeded {created}")
    return created
