from storefront_api.app.core.config import settings
from storefront_api.app.core.security import ADMIN_ROLE, create_access_token, hash_password

from .conftest import ADMIN_ID, ADMIN_PASSWORD


def _place_order(client, service_id):
    response = client.post("/api/orders", json={"telegramId": "@x", "serviceId": service_id, "amount": 400})
    return response.json()["orderId"]


def test_admin_login_issues_working_token(client, seven_day_pack):
    response = client.post("/api/admin/login", json={"adminId": ADMIN_ID, "password": ADMIN_PASSWORD})
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["expiresIn"] == settings.access_token_expire_minutes * 60

    orders = client.get("/api/admin/orders", headers={"Authorization": f"Bearer {body['token']}"})
    assert orders.status_code == 200


def test_admin_login_rejects_bad_credentials(client):
    assert client.post("/api/admin/login", json={"adminId": ADMIN_ID, "password": "nope"}).status_code == 401
    assert client.post("/api/admin/login", json={"adminId": "root", "password": ADMIN_PASSWORD}).status_code == 401
    assert client.post("/api/admin/login", json={"adminId": ADMIN_ID}).status_code == 400


def test_admin_login_with_password_hash(client, monkeypatch):
    monkeypatch.setattr(settings, "admin_password", "")
    monkeypatch.setattr(settings, "admin_password_hash", hash_password("hashed-pass"))
    assert client.post("/api/admin/login", json={"adminId": ADMIN_ID, "password": "hashed-pass"}).status_code == 200
    assert client.post("/api/admin/login", json={"adminId": ADMIN_ID, "password": ADMIN_PASSWORD}).status_code == 401


def test_admin_login_disabled_without_password(client, monkeypatch):
    monkeypatch.setattr(settings, "admin_password", "")
    assert client.post("/api/admin/login", json={"adminId": ADMIN_ID, "password": ""}).status_code == 400
    assert client.post("/api/admin/login", json={"adminId": ADMIN_ID, "password": "x"}).status_code == 401


def test_admin_routes_require_valid_token(client, seven_day_pack):
    expired = create_access_token({"sub": ADMIN_ID, "role": ADMIN_ROLE}, expires_delta=-1)
    for headers in ({}, {"Authorization": "Bearer garbage"}, {"Authorization": f"Bearer {expired}"}):
        assert client.get("/api/admin/orders", headers=headers).status_code == 401
        assert client.delete(f"/api/admin/services/{seven_day_pack.id}", headers=headers).status_code == 401
    assert client.get("/api/services").json()[0]["id"] == seven_day_pack.id


def test_admin_order_listing_includes_email(client, seven_day_pack, admin_headers):
    user_id = client.post("/api/auth/register", json={"email": "b@example.com", "password": "pw"}).json()["userId"]
    client.post("/api/orders", json={"telegramId": "@u", "serviceId": seven_day_pack.id, "amount": 400, "userId": user_id})
    _place_order(client, seven_day_pack.id)

    orders = client.get("/api/admin/orders", headers=admin_headers).json()
    assert [order["user_email"] for order in orders] == [None, "b@example.com"]
    assert {order["service_name"] for order in orders} == {"7 Day Pack"}


def test_patch_order_routes(client, seven_day_pack, admin_headers):
    order_id = _place_order(client, seven_day_pack.id)
    client.post("/api/orders/confirm", json={"orderId": order_id, "utr": "UTR123"})

    put = client.put(f"/api/admin/orders/{order_id}", json={"status": "completed"}, headers=admin_headers)
    assert put.status_code == 200
    order = client.get(f"/api/orders/{order_id}").json()
    assert (order["status"], order["telegram_id"], order["amount"], order["utr"]) == ("completed", "@x", 400, "UTR123")

    legacy = client.post(
        "/api/admin/orders/update", json={"orderId": order_id, "telegramId": "@y", "amount": None}, headers=admin_headers
    )
    assert legacy.status_code == 200
    order = client.get(f"/api/orders/{order_id}").json()
    assert (order["telegram_id"], order["amount"]) == ("@y", 400)

    assert client.put(f"/api/admin/orders/{order_id}", json={"status": "bogus"}, headers=admin_headers).status_code == 400
    assert client.put("/api/admin/orders/MARS-NOPE00000", json={"status": "failed"}, headers=admin_headers).status_code == 404
    assert client.post("/api/admin/orders/update", json={"status": "failed"}, headers=admin_headers).status_code == 400


def test_delete_order_route(client, seven_day_pack, admin_headers):
    order_id = _place_order(client, seven_day_pack.id)
    assert client.delete(f"/api/admin/orders/{order_id}", headers=admin_headers).json() == {"success": True}
    assert client.get(f"/api/orders/{order_id}").status_code == 404
    assert client.delete(f"/api/admin/orders/{order_id}", headers=admin_headers).status_code == 404


def test_service_management(client, admin_headers):
    created = client.post(
        "/api/admin/services", json={"name": "1 Day Pack", "price": 100, "duration": "1 Day"}, headers=admin_headers
    )
    assert created.status_code == 201
    service_id = created.json()["id"]

    invalid = client.post("/api/admin/services", json={"name": "Bad", "price": 0, "duration": "x"}, headers=admin_headers)
    assert invalid.status_code == 400

    updated = client.put(
        f"/api/admin/services/{service_id}",
        json={"name": "1 Day Pack", "price": 120, "duration": "1 Day"},
        headers=admin_headers,
    )
    assert updated.status_code == 200
    assert client.get("/api/services").json()[0]["price"] == 120

    missing = client.put(
        "/api/admin/services/999", json={"name": "X", "price": 1, "duration": "Y"}, headers=admin_headers
    )
    assert missing.status_code == 404

    order_id = _place_order(client, service_id)
    blocked = client.delete(f"/api/admin/services/{service_id}", headers=admin_headers)
    assert blocked.status_code == 409
    assert blocked.json()["code"] == "CONFLICT"

    client.delete(f"/api/admin/orders/{order_id}", headers=admin_headers)
    assert client.delete(f"/api/admin/services/{service_id}", headers=admin_headers).status_code == 200
    assert client.get("/api/services").json() == []


def test_audit_trail(client, seven_day_pack, admin_headers):
    order_id = _place_order(client, seven_day_pack.id)
    client.put(f"/api/admin/orders/{order_id}", json={"status": "failed"}, headers=admin_headers)
    client.delete(f"/api/admin/orders/{order_id}", headers=admin_headers)

    logs = client.get("/api/admin/audit", params={"object_type": "order"}, headers=admin_headers).json()
    assert [entry["action"] for entry in logs] == ["delete", "update"]
    assert logs[1]["actor"] == ADMIN_ID
    assert logs[1]["details"] == {"before": {"status": "pending"}, "after": {"status": "failed"}}
    assert client.get("/api/admin/audit").status_code == 401


def test_out_of_range_integers_are_rejected(client, seven_day_pack, admin_headers):
    huge = 2**70
    body = {"name": "Big", "price": huge, "duration": "1 Day"}
    responses = [
        client.post("/api/admin/services", json=body, headers=admin_headers),
        client.put(f"/api/admin/services/{seven_day_pack.id}", json=body, headers=admin_headers),
        client.put(
            f"/api/admin/services/{huge}",
            json={"name": "X", "price": 1, "duration": "Y"},
            headers=admin_headers,
        ),
        client.delete(f"/api/admin/services/{huge}", headers=admin_headers),
    ]
    order_id = _place_order(client, seven_day_pack.id)
    responses.append(client.put(f"/api/admin/orders/{order_id}", json={"amount": huge}, headers=admin_headers))

    assert [response.status_code for response in responses] == [400] * 5
    assert {response.json()["code"] for response in responses} == {"VALIDATION_ERROR"}
    assert client.get(f"/api/orders/{order_id}").json()["amount"] == 400
    assert [item["price"] for item in client.get("/api/services").json()] == [400]
