API = "/api/v1/catalog"

PRODUCT = {
    "name": "Remera lisa",
    "code": " rem001 ",
    "buy_price": 300,
    "sell_price": 500,
    "category": "Remeras",
    "tags": "verano, algodón",
    "sizes": ["S", "M", "L"],
    "stock": 6,
}

SUPPLIER = {
    "name": "Textil Once",
    "whatsapp_numbers": ["11 2345-6789"],
    "area": "Once",
    "cuit": "20-12345678-6",
    "quality_rating": 4,
}


def create_product(client, headers, **overrides):
    response = client.post(f"{API}/products", json={**PRODUCT, **overrides}, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def test_create_product_normalizes_fields(client, seller_headers):
    product = create_product(client, seller_headers)

    assert product["code"] == "REM001"
    assert product["tags"] == ["verano", "algodón"]
    assert product["profit_percentage"] == 66.67
    assert product["stock"] == 6


def test_sell_price_must_exceed_buy_price(client, seller_headers):
    response = client.post(f"{API}/products", json={**PRODUCT, "sell_price": 300}, headers=seller_headers)
    assert response.status_code == 422


def test_duplicate_code_conflict(client, seller_headers):
    create_product(client, seller_headers)
    response = client.post(f"{API}/products", json={**PRODUCT, "code": "REM001"}, headers=seller_headers)

    assert response.status_code == 409
    assert "REM001" in response.json()["detail"]


def test_list_and_search_products(client, seller_headers):
    create_product(client, seller_headers)
    create_product(client, seller_headers, name="Jean recto", code="JEA001", category="Jeans", stock=20)

    listing = client.get(f"{API}/products", headers=seller_headers).json()
    assert listing["count"] == 2

    found = client.get(f"{API}/products", params={"search": "jean"}, headers=seller_headers).json()
    assert [p["code"] for p in found["products"]] == ["JEA001"]

    low = client.get(f"{API}/products", params={"low_stock": True}, headers=seller_headers).json()
    assert low["count"] == 0


def test_update_product_recomputes_profit(client, seller_headers):
    product = create_product(client, seller_headers)

    response = client.put(
        f"{API}/products/{product['id']}",
        json={**PRODUCT, "buy_price": 100, "sell_price": 150},
        headers=seller_headers
    )

    assert response.status_code == 200
    assert response.json()["profit_percentage"] == 50.0


def test_adjust_stock(client, admin_headers):
    product = create_product(client, admin_headers)

    response = client.post(f"{API}/products/{product['id']}/stock", json={"delta": -4}, headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["stock"] == 2

    response = client.post(f"{API}/products/{product['id']}/stock", json={"delta": -3}, headers=admin_headers)
    assert response.status_code == 400

    response = client.post(f"{API}/products/{product['id']}/stock", json={"delta": 0}, headers=admin_headers)
    assert response.status_code == 422


def test_delete_product(client, admin_headers):
    product = create_product(client, admin_headers)

    assert client.delete(f"{API}/products/{product['id']}", headers=admin_headers).status_code == 200
    assert client.get(f"{API}/products/{product['id']}", headers=admin_headers).status_code == 404


def test_supplier_crud(client, admin_headers):
    response = client.post(f"{API}/suppliers", json=SUPPLIER, headers=admin_headers)
    assert response.status_code == 201, response.text
    supplier = response.json()
    assert supplier["social_media"] == {"instagram": None, "facebook": None, "twitter": None}

    product = create_product(client, admin_headers, supplier_id=supplier["id"])
    assert product["supplier_id"] == supplier["id"]

    response = client.put(
        f"{API}/suppliers/{supplier['id']}",
        json={**SUPPLIER, "notes": "Entrega los martes"},
        headers=admin_headers
    )
    assert response.json()["notes"] == "Entrega los martes"

    assert client.delete(f"{API}/suppliers/{supplier['id']}", headers=admin_headers).status_code == 200
    product = client.get(f"{API}/products/{product['id']}", headers=admin_headers).json()
    assert product["supplier_id"] is None


def test_supplier_validation(client, admin_headers):
    bad_cuit = client.post(f"{API}/suppliers", json={**SUPPLIER, "cuit": "20-12345678-5"}, headers=admin_headers)
    bad_phone = client.post(f"{API}/suppliers", json={**SUPPLIER, "whatsapp_numbers": ["123"]}, headers=admin_headers)

    assert bad_cuit.status_code == 422
    assert bad_phone.status_code == 422


def test_product_with_unknown_supplier(client, admin_headers):
    response = client.post(f"{API}/products", json={**PRODUCT, "supplier_id": 99}, headers=admin_headers)
    assert response.status_code == 400
