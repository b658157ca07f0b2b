from app.repos.catalog_repo import CatalogRepo


def test_active_restaurants_sorted_by_rating(db, catalog):
    restaurants = CatalogRepo(db).list_active_restaurants()

    assert [r.id for r in restaurants] == ["rest-b", "rest-r"]


def test_menu_only_available_items_sorted_by_category(db, catalog):
    items = CatalogRepo(db).get_menu_items("rest-r")

    # Desery < Pizza, niedostepne U pominiete
    assert [i.id for i in items] == ["item-y", "item-x"]


def test_menu_of_unknown_restaurant_is_empty(db, catalog):
    assert CatalogRepo(db).get_menu_items("nope") == []
    assert CatalogRepo(db).get_restaurant("nope") is None


def test_seed_only_fills_empty_store(db):
    from app.data.seed import seed

    assert seed(db) == 2
    assert seed(db) == 0
    assert len(CatalogRepo(db).list_active_restaurants()) == 2
