import concurrent.futures
import uuid

from fastapi.testclient import TestClient

from plantstore.config import settings
from plantstore.main import app
from plantstore.utils.locks import user_lock

client = TestClient(app)


def _user():
    return f"user-{uuid.uuid4().hex[:8]}"


def _assert_totals_match(cart):
    assert cart["totalItems"] == sum(it["quantity"] for it in cart["items"])
    assert cart["totalAmount"] == sum(it["quantity"] * it["cartPrice"] for it in cart["items"])


def test_empty_cart_is_not_an_error():
    res = client.get(f"/api/cart/{_user()}")
    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    assert body["data"] == {"items": [], "totalItems": 0, "totalAmount": 0}


def test_add_update_remove_scenario(make_plant):
    user = _user()
    pid = make_plant(name="Money Plant", price=299)

    res = client.post(f"/api/cart/{user}", json={"plantId": pid, "quantity": 1})
    assert res.status_code == 201
    body = res.json()
    assert body["message"] == "Item added to cart successfully"
    assert body["data"] == {"totalItems": 1, "totalAmount": 299, "addedItem": "Money Plant"}

    res = client.put(f"/api/cart/{user}/{pid}", json={"quantity": 3})
    assert res.status_code == 200
    assert res.json()["data"] == {"totalItems": 3, "totalAmount": 897}

    res = client.delete(f"/api/cart/{user}/{pid}")
    assert res.status_code == 200
    assert res.json()["data"] == {"totalItems": 0, "totalAmount": 0}

    res = client.delete(f"/api/cart/{user}/{pid}")
    assert res.status_code == 404
    assert res.json()["error"] == "NotFound"
    assert res.json()["message"] == "Item not found in cart"


def test_add_same_plant_merges_lines(make_plant):
    user = _user()
    pid = make_plant(price=120)

    client.post(f"/api/cart/{user}", json={"plantId": pid, "quantity": 2})
    res = client.post(f"/api/cart/{user}", json={"plantId": pid, "quantity": 3})
    assert res.json()["data"]["totalItems"] == 5

    cart = client.get(f"/api/cart/{user}").json()["data"]
    assert len(cart["items"]) == 1
    assert cart["items"][0]["quantity"] == 5
    assert cart["items"][0]["cartPrice"] == 120
    _assert_totals_match(cart)


def test_get_cart_hydrates_plant_fields(make_plant):
    user = _user()
    a = make_plant(name="Peace Lily", price=699, categories=["Indoor", "Flowering"])
    b = make_plant(name="Aloe Vera", price=349, light_requirement="High")
    client.post(f"/api/cart/{user}", json={"plantId": a})
    client.post(f"/api/cart/{user}", json={"plantId": b, "quantity": 2})

    cart = client.get(f"/api/cart/{user}").json()["data"]
    assert [it["name"] for it in cart["items"]] == ["Peace Lily", "Aloe Vera"]
    assert cart["items"][0]["categories"] == ["Indoor", "Flowering"]
    assert cart["items"][1]["lightRequirement"] == "High"
    assert cart["totalItems"] == 3
    assert cart["totalAmount"] == 699 + 2 * 349
    assert "updatedAt" in cart
    _assert_totals_match(cart)


def test_quantity_defaults_to_one_and_is_coerced(make_plant):
    user = _user()
    pid = make_plant(price=10)
    assert client.post(f"/api/cart/{user}", json={"plantId": pid}).json()["data"]["totalItems"] == 1
    assert client.post(f"/api/cart/{user}", json={"plantId": pid, "quantity": "2"}).json()["data"]["totalItems"] == 3
    assert client.post(f"/api/cart/{user}", json={"plantId": pid, "quantity": "4 pots"}).json()["data"]["totalItems"] == 7


def test_add_rejects_bad_quantity(make_plant):
    user = _user()
    pid = make_plant()
    for qty in (0, -2, "none", None):
        res = client.post(f"/api/cart/{user}", json={"plantId": pid, "quantity": qty})
        assert res.status_code == 400, qty
        assert res.json()["error"] == "InvalidArgument"
    assert client.get(f"/api/cart/{user}").json()["data"]["items"] == []


def test_add_requires_plant_id():
    res = client.post(f"/api/cart/{_user()}", json={"quantity": 1})
    assert res.status_code == 400
    assert res.json()["message"] == "Plant ID is required"


def test_add_rejects_malformed_plant_id():
    for bad in ("plant-1", uuid.uuid4().hex.upper(), str(uuid.uuid4())):
        res = client.post(f"/api/cart/{_user()}", json={"plantId": bad})
        assert res.status_code == 400, bad
        assert res.json()["error"] == "InvalidArgument"


def test_add_missing_plant():
    res = client.post(f"/api/cart/{_user()}", json={"plantId": uuid.uuid4().hex})
    assert res.status_code == 404
    assert res.json() == {"success": False, "message": "Plant not found", "error": "NotFound"}


def test_add_unavailable_plant(make_plant):
    pid = make_plant(available=False)
    res = client.post(f"/api/cart/{_user()}", json={"plantId": pid})
    assert res.status_code == 400
    assert res.json()["error"] == "Unavailable"


def test_update_validations(make_plant):
    user = _user()
    pid = make_plant()

    res = client.put(f"/api/cart/{user}/{pid}", json={"quantity": 0})
    assert res.status_code == 400
    assert res.json()["message"] == "Quantity must be greater than 0"

    res = client.put(f"/api/cart/{user}/{pid}", json={"quantity": 2})
    assert res.status_code == 404
    assert res.json()["message"] == "Cart not found"

    client.post(f"/api/cart/{user}", json={"plantId": pid})
    other = make_plant(name="Not in cart")
    res = client.put(f"/api/cart/{user}/{other}", json={"quantity": 2})
    assert res.status_code == 404
    assert res.json()["message"] == "Item not found in cart"


def test_remove_from_missing_cart():
    res = client.delete(f"/api/cart/{_user()}/{uuid.uuid4().hex}")
    assert res.status_code == 404
    assert res.json()["message"] == "Cart not found"


def test_clear_cart(make_plant):
    user = _user()
    res = client.delete(f"/api/cart/{user}")
    assert res.status_code == 404

    client.post(f"/api/cart/{user}", json={"plantId": make_plant(price=50), "quantity": 2})
    client.post(f"/api/cart/{user}", json={"plantId": make_plant(price=70)})

    res = client.delete(f"/api/cart/{user}")
    assert res.status_code == 200
    assert res.json()["data"] == {"totalItems": 0, "totalAmount": 0}

    # clearing an empty cart still succeeds
    res = client.delete(f"/api/cart/{user}")
    assert res.status_code == 200

    cart = client.get(f"/api/cart/{user}").json()["data"]
    assert cart["items"] == []
    assert cart["totalItems"] == 0


def test_deleted_plant_is_hidden_from_cart(make_plant, remove_plant):
    user = _user()
    keep = make_plant(price=100)
    gone = make_plant(price=40)
    client.post(f"/api/cart/{user}", json={"plantId": keep})
    client.post(f"/api/cart/{user}", json={"plantId": gone, "quantity": 2})
    remove_plant(gone)

    cart = client.get(f"/api/cart/{user}").json()["data"]
    assert [it["id"] for it in cart["items"]] == [keep]
    # stored totals still count the hidden line until it is touched
    assert cart["totalItems"] == 3

    res = client.delete(f"/api/cart/{user}/{gone}")
    assert res.status_code == 200
    assert res.json()["data"] == {"totalItems": 1, "totalAmount": 100}


def test_missing_body_is_invalid_argument(make_plant):
    res = client.put(f"/api/cart/{_user()}/{make_plant()}")
    assert res.status_code == 400
    assert res.json()["error"] == "InvalidArgument"


def test_quantity_above_limit_is_rejected(make_plant):
    user = _user()
    pid = make_plant(price=5)
    res = client.post(f"/api/cart/{user}", json={"plantId": pid, "quantity": 10**20})
    assert res.status_code == 400
    assert res.json()["error"] == "InvalidArgument"
    assert client.get(f"/api/cart/{user}").json()["data"]["items"] == []

    client.post(f"/api/cart/{user}", json={"plantId": pid})
    res = client.put(f"/api/cart/{user}/{pid}", json={"quantity": settings.MAX_ITEM_QUANTITY + 1})
    assert res.status_code == 400
    assert res.json()["message"] == f"Quantity cannot exceed {settings.MAX_ITEM_QUANTITY}"


def test_merge_cannot_push_line_past_limit(make_plant):
    user = _user()
    pid = make_plant(price=5)
    limit = settings.MAX_ITEM_QUANTITY
    assert client.post(f"/api/cart/{user}", json={"plantId": pid, "quantity": limit - 1}).status_code == 201

    res = client.post(f"/api/cart/{user}", json={"plantId": pid, "quantity": 2})
    assert res.status_code == 400
    assert res.json()["error"] == "InvalidArgument"

    cart = client.get(f"/api/cart/{user}").json()["data"]
    assert cart["totalItems"] == limit - 1
    assert cart["items"][0]["quantity"] == limit - 1

    assert client.post(f"/api/cart/{user}", json={"plantId": pid, "quantity": 1}).status_code == 201


def test_concurrent_adds_keep_totals_consistent(make_plant):
    user = _user()
    pid = make_plant(price=25)
    workers = 12

    def add(_):
        return client.post(f"/api/cart/{user}", json={"plantId": pid, "quantity": 1}).status_code

    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as ex:
        statuses = list(ex.map(add, range(workers)))
    assert statuses == [201] * workers

    cart = client.get(f"/api/cart/{user}").json()["data"]
    assert len(cart["items"]) == 1
    assert cart["items"][0]["quantity"] == workers
    assert cart["totalItems"] == workers
    assert cart["totalAmount"] == 25 * workers
    _assert_totals_match(cart)


def test_held_user_lock_is_transient(make_plant, monkeypatch):
    user = _user()
    pid = make_plant()
    monkeypatch.setattr(settings, "LOCK_TIMEOUT_SECONDS", 0)

    with user_lock("cart", user, timeout=5):
        res = client.post(f"/api/cart/{user}", json={"plantId": pid})
    assert res.status_code == 503
    assert res.json()["error"] == "Transient"
    assert client.get(f"/api/cart/{user}").json()["data"]["items"] == []

    assert client.post(f"/api/cart/{user}", json={"plantId": pid}).status_code == 201
