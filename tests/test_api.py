from conftest import USER


def add(client, item, restaurant, delta=1, user=USER):
    return client.post(
        f"/carts/{user}/items",
        json={"restaurant_id": restaurant, "menu_item_id": item, "delta": delta},
    )


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_restaurants_and_menu(client):
    restaurants = client.get("/restaurants/").json()
    assert [r["id"] for r in restaurants] == ["rest-b", "rest-r"]

    menu = client.get("/restaurants/rest-r/menu").json()
    assert [m["name"] for m in menu] == ["Y", "X"]

    assert client.get("/restaurants/nope/menu").status_code == 404


def test_cart_flow_with_conflict_and_replace(client):
    assert add(client, "item-x", "rest-r", 2).json()["quantity"] == 2

    r = add(client, "item-z", "rest-b")
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "conflict"
    assert body["conflict"]["pending_quantity"] == 1
    assert body["conflict"]["cart_restaurant_ids"] == ["rest-r"]

    cart = client.get(f"/carts/{USER}").json()
    assert [i["menu_item_id"] for i in cart["items"]] == ["item-x"]

    r = client.post(
        f"/carts/{USER}/replace",
        json={"restaurant_id": "rest-b", "menu_item_id": "item-z", "quantity": 1},
    )
    assert r.status_code == 200
    cart = r.json()
    assert cart["restaurant_id"] == "rest-b"
    assert [i["menu_item_id"] for i in cart["items"]] == ["item-z"]
    assert float(cart["total"]) == 70.0


def test_remove_item(client):
    add(client, "item-x", "rest-r", 3)

    r = client.delete(f"/carts/{USER}/items/item-x")

    assert r.json()["quantity"] == 0
    assert client.get(f"/carts/{USER}").json()["items"] == []


def test_unknown_item_is_bad_request(client):
    r = add(client, "item-x", "rest-b")

    assert r.status_code == 400
    assert r.json()["detail"]["reason"] == "unknown_menu_item"


def test_order_submission_and_tracking(client, notifications):
    add(client, "item-x", "rest-r", 2)
    add(client, "item-y", "rest-r", 1)

    r = client.post("/orders/", json={"user_id": USER, "delivery_address": "ul. Prosta 1"})
    assert r.status_code == 201
    order = r.json()
    assert order["status"] == "pending"
    assert float(order["total_amount"]) == 250.0
    assert order["restaurant_name"] == "Restauracja R"
    assert client.get(f"/carts/{USER}").json()["items"] == []

    add(client, "item-x", "rest-r", 1)
    r = client.post("/orders/", json={"user_id": USER})
    assert r.status_code == 409
    assert r.json()["detail"]["reason"] == "active_order"

    listed = client.get("/orders/", params={"user_id": USER}).json()
    assert [o["id"] for o in listed] == [order["id"]]

    assert client.get(f"/orders/{order['id']}", params={"user_id": "telegram_2002"}).status_code == 403

    r = client.post(f"/orders/{order['id']}/cancel", params={"user_id": USER})
    assert r.json()["status"] == "cancelled"

    history = client.get(f"/orders/{order['id']}/history", params={"user_id": USER}).json()
    assert [h["status"] for h in history] == ["pending", "cancelled"]

    r = client.post(f"/orders/{order['id']}/cancel", params={"user_id": USER})
    assert r.status_code == 409
    assert r.json()["detail"]["reason"] == "order_not_cancellable"
    assert len(notifications) == 1


def test_empty_cart_order_is_bad_request(client):
    r = client.post("/orders/", json={"user_id": USER})

    assert r.status_code == 400
    assert r.json()["detail"]["reason"] == "cart_empty"


def test_missing_order_is_not_found(client):
    r = client.get("/orders/missing", params={"user_id": USER})

    assert r.status_code == 404


def test_store_failure_maps_to_503(client, monkeypatch):
    from app.domain.errors import StoreError
    from app.repos.cart_repo import CartRepo

    def boom(self, *args, **kwargs):
        raise StoreError("upsert_line", "down")

    monkeypatch.setattr(CartRepo, "upsert_line", boom)

    r = add(client, "item-x", "rest-r")

    assert r.status_code == 503
    assert r.json()["detail"]["step"] == "upsert_line"
    assert add(client, "item-x", "rest-r", -1).json()["quantity"] == 0


def test_telegram_profile_upsert(client):
    payload = {"id": 1001, "first_name": "Ola", "username": "ola", "language_code": "pl", "is_premium": True}

    r = client.post("/users/telegram", json=payload)
    assert r.status_code == 200
    assert r.json()["user_id"] == USER
    assert r.json()["is_premium"] is True

    payload["first_name"] = "Aleksandra"
    client.post("/users/telegram", json=payload)

    profile = client.get(f"/users/{USER}").json()
    assert profile["first_name"] == "Aleksandra"
    assert profile["role"] == "user"

    assert client.get("/users/telegram_9").status_code == 404


def test_redis_outage_maps_to_503(client, redis_client, monkeypatch):
    import redis

    def down(*args, **kwargs):
        raise redis.ConnectionError("redis down")

    monkeypatch.setattr(redis_client, "exists", down)

    r = add(client, "item-x", "rest-r")

    assert r.status_code == 503
    assert r.json()["detail"]["step"] == "cart_mirror"
    # baza nietknieta
    monkeypatch.undo()
    assert client.get(f"/carts/{USER}").json()["items"] == []


def test_inactive_restaurant_item_is_bad_request(client):
    r = add(client, "item-c", "rest-c")

    assert r.status_code == 400
    assert r.json()["detail"]["reason"] == "unknown_menu_item"
