from click.testing import CliRunner

from food_ordering.core.database import drop_tables
from food_ordering.core.security import verify_password
from food_ordering.manage import cli
from food_ordering.models.restaurant import MenuItem, Restaurant
from food_ordering.models.user import Country, User, UserRole
from food_ordering.seed import seed_database


def test_seed_creates_demo_data_once(db):
    assert seed_database(db) == {"users": 6, "restaurants": 4, "menu_items": 10}
    assert seed_database(db) == {"users": 0, "restaurants": 0, "menu_items": 0}

    fury = db.query(User).filter(User.email == "nick.fury@shield.com").one()
    assert fury.role == UserRole.ADMIN
    assert fury.country == Country.AMERICA
    assert verify_password("admin123", fury.hashed_password)

    india = db.query(Restaurant).filter(Restaurant.country == Country.INDIA).count()
    assert india == 2
    assert db.query(MenuItem).count() == 10


def test_seeded_accounts_can_log_in(client, db):
    seed_database(db)
    response = client.post("/auth/login", json={"email": "thor@shield.com", "password": "member123"})
    assert response.status_code == 200
    assert response.json()["data"]["user"]["country"] == "india"


def test_seed_command():
    runner = CliRunner()
    try:
        result = runner.invoke(cli, ["seed"])
        assert result.exit_code == 0, result.output
        assert "Seeded 6 users, 4 restaurants, 10 menu items" in result.output
    finally:
        drop_tables()


def test_health_endpoint(client):
    assert client.get("/health").json() == {"status": "healthy", "service": "food-ordering-api"}
