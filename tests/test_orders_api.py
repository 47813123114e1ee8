import pytest


def _place_order(client, service_id, **extra):
    body = {"telegramId": "@x", "serviceId": service_id, "amount": 400}
    body.update(extra)
    response = client.post("/api/orders", json=body)
    assert response.status_code == 201, response.text
    return response.json()["orderId"]


def test_checkout_flow(client, seven_day_pack, admin_headers):
    order_id = _place_order(client, seven_day_pack.id)

    confirm = client.post("/api/orders/confirm", json={"orderId": order_id, "utr": "UTR123"})
    assert confirm.status_code == 200
    assert confirm.json() == {"success": True}

    order = client.get(f"/api/orders/{order_id}").json()
    assert order["status"] == "processing"
    assert order["utr"] == "UTR123"
    assert order["service_name"] == "7 Day Pack"

    done = client.post(
        "/api/orders/confirm", json={"orderId": order_id, "status": "completed"}, headers=admin_headers
    )
    assert done.status_code == 200
    assert client.get(f"/api/orders/{order_id}").json()["status"] == "completed"

    late = client.post("/api/orders/confirm", json={"orderId": order_id, "utr": "UTR999"})
    assert late.status_code == 409
    assert late.json()["code"] == "CONFLICT"


def test_status_override_requires_admin_token(client, seven_day_pack):
    order_id = _place_order(client, seven_day_pack.id)
    response = client.post("/api/orders/confirm", json={"orderId": order_id, "status": "completed"})
    assert response.status_code == 401
    assert client.get(f"/api/orders/{order_id}").json()["status"] == "pending"


def test_create_order_errors(client, seven_day_pack):
    missing = client.post("/api/orders", json={"serviceId": seven_day_pack.id, "amount": 400})
    assert missing.status_code == 400
    assert missing.json()["code"] == "VALIDATION_ERROR"

    not_numeric = client.post("/api/orders", json={"telegramId": "@x", "serviceId": "abc", "amount": 400})
    assert not_numeric.status_code == 400

    unknown_service = client.post("/api/orders", json={"telegramId": "@x", "serviceId": 999, "amount": 400})
    assert unknown_service.status_code == 400
    assert unknown_service.json()["code"] == "INVALID_REFERENCE"

    unknown_user = client.post(
        "/api/orders", json={"telegramId": "@x", "serviceId": seven_day_pack.id, "amount": 400, "userId": 77}
    )
    assert unknown_user.status_code == 400
    assert unknown_user.json()["code"] == "INVALID_REFERENCE"


def test_numeric_strings_are_accepted(client, seven_day_pack):
    response = client.post(
        "/api/orders", json={"telegramId": "@x", "serviceId": str(seven_day_pack.id), "amount": "400"}
    )
    assert response.status_code == 201


def test_guest_order_with_null_user(client, seven_day_pack):
    order_id = _place_order(client, seven_day_pack.id, userId=None)
    assert client.get(f"/api/orders/{order_id}").json()["user_id"] is None


def test_confirm_unknown_order(client):
    response = client.post("/api/orders/confirm", json={"orderId": "MARS-NOPE00000", "utr": "UTR1"})
    assert response.status_code == 404
    assert response.json()["error"] == "Order MARS-NOPE00000 not found"


def test_user_orders(client, seven_day_pack):
    user_id = client.post("/api/auth/register", json={"email": "b@example.com", "password": "pw"}).json()["userId"]
    older = _place_order(client, seven_day_pack.id, userId=user_id)
    _place_order(client, seven_day_pack.id)
    newer = _place_order(client, seven_day_pack.id, userId=user_id)

    response = client.get(f"/api/user/orders/{user_id}")
    assert response.status_code == 200
    assert [order["id"] for order in response.json()] == [newer, older]
    assert all(order["service_name"] == "7 Day Pack" for order in response.json())

    assert client.get("/api/user/orders/not-a-number").status_code == 400
    assert client.get("/api/user/orders/12345").json() == []


def test_empty_status_is_a_payment_submission(client, seven_day_pack):
    order_id = _place_order(client, seven_day_pack.id)
    response = client.post("/api/orders/confirm", json={"orderId": order_id, "utr": "UTR123", "status": ""})
    assert response.status_code == 200
    order = client.get(f"/api/orders/{order_id}").json()
    assert (order["status"], order["utr"]) == ("processing", "UTR123")


@pytest.mark.parametrize(
    "field,value",
    [("amount", 2**70), ("serviceId", 2**70), ("userId", 2**70), ("amount", -(2**70))],
)
def test_out_of_range_integers_are_rejected(client, seven_day_pack, field, value):
    body = {"telegramId": "@x", "serviceId": seven_day_pack.id, "amount": 400}
    body[field] = value
    response = client.post("/api/orders", json=body)
    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_out_of_range_user_id_in_path(client):
    response = client.get(f"/api/user/orders/{2**70}")
    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"
