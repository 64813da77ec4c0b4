import pytest

from food_ordering.core.exceptions import Forbidden, InvalidInput, NotFound
from food_ordering.models.restaurant import MenuItem
from food_ordering.services.catalog_service import CatalogService


@pytest.fixture
def catalog(spice_palace, american_diner, make_restaurant):
    curry_house = make_restaurant("Curry House", items=(("Dal Makhani", "9.99"),))
    return {"india": [spice_palace, curry_house], "america": [american_diner]}


def names(restaurants):
    return sorted(r["name"] if isinstance(r, dict) else r.name for r in restaurants)


def test_find_by_country_filters_exactly(db, catalog):
    service = CatalogService(db)
    assert names(service.find_by_country("india")) == ["Curry House", "Spice Palace"]
    assert names(service.find_by_country("america")) == ["American Diner"]
    assert len(service.find_by_country()) == 3


def test_find_by_country_rejects_unknown_country(db, catalog):
    with pytest.raises(InvalidInput):
        CatalogService(db).find_by_country("france")


def test_substring_search(db, catalog):
    assert names(CatalogService(db).find_by_country(search="curry")) == ["Curry House"]
    assert names(CatalogService(db).find_by_country("america", search="spice")) == []


def test_member_sees_only_own_country(client, catalog, india_member, headers):
    response = client.get("/restaurants", headers=headers(india_member))
    assert response.status_code == 200
    assert names(response.json()) == ["Curry House", "Spice Palace"]
    assert {r["country"] for r in response.json()} == {"india"}


def test_non_admin_asking_for_other_country_is_forbidden(client, catalog, india_member, headers):
    response = client.get("/restaurants", params={"country": "america"}, headers=headers(india_member))
    assert response.status_code == 403


def test_admin_lists_all_or_filters(client, catalog, admin, headers):
    everything = client.get("/restaurants", headers=headers(admin)).json()
    assert len(everything) == 3
    india = client.get("/restaurants", params={"country": "india"}, headers=headers(admin)).json()
    assert names(india) == ["Curry House", "Spice Palace"]
    bad = client.get("/restaurants", params={"country": "mars"}, headers=headers(admin))
    assert bad.status_code == 400
    assert bad.json() == {"success": False, "message": "Invalid country: mars"}


def test_restaurant_payload_shape(client, spice_palace, india_member, headers):
    restaurant = client.get(f"/restaurants/{spice_palace.id}", headers=headers(india_member)).json()
    assert restaurant == {
        "id": spice_palace.id,
        "name": "Spice Palace",
        "description": "Spice Palace kitchen",
        "address": "1 Test Street",
        "image": "",
        "country": "india",
        "rating": 4.5,
    }


def test_menu_returns_available_items_only(client, db, spice_palace, india_member, headers):
    naan = db.query(MenuItem).filter(MenuItem.name == "Naan Bread").one()
    naan.available = False
    db.commit()

    response = client.get(f"/restaurants/{spice_palace.id}/menu", headers=headers(india_member))
    assert response.status_code == 200
    menu = response.json()
    assert [item["name"] for item in menu] == ["Biryani"]
    assert menu[0]["price"] == 14.99
    assert menu[0]["restaurantId"] == spice_palace.id


def test_menu_of_foreign_restaurant_is_forbidden(db, spice_palace, america_member):
    with pytest.raises(Forbidden):
        CatalogService(db).get_menu_items(spice_palace.id, america_member)


def test_admin_reads_any_menu(db, spice_palace, admin):
    assert len(CatalogService(db).get_menu_items(spice_palace.id, admin)) == 2


def test_menu_of_missing_restaurant_is_not_found(client, india_member, headers):
    response = client.get("/restaurants/999/menu", headers=headers(india_member))
    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Restaurant not found"}


def test_missing_restaurant_raises_not_found(db, admin):
    with pytest.raises(NotFound):
        CatalogService(db).get_restaurant(12345, admin)


def test_catalog_requires_authentication(client, catalog):
    assert client.get("/restaurants").status_code == 401
