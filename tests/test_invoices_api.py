API = "/api/v1/invoices"

INVOICE = {
    "invoice_number": "A-0001-00001234",
    "supplier_name": "Textil Once",
    "amount": 125000.5,
    "date": "2024-08-10",
    "type": "factura",
    "file": {"url": "https://files.example.com/f1234.pdf", "name": "f1234.pdf", "content_type": "application/pdf", "size": 20480},
}


def create_invoice(client, headers, **overrides):
    response = client.post(API, json={**INVOICE, **overrides}, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def test_create_invoice(client, admin_headers):
    invoice = create_invoice(client, admin_headers)

    assert invoice["amount"] == 125000.5
    assert invoice["date"] == "2024-08-10"
    assert invoice["file"]["name"] == "f1234.pdf"
    assert invoice["created_by"] == "admin-1"


def test_amount_must_be_positive(client, admin_headers):
    response = client.post(API, json={**INVOICE, "amount": 0}, headers=admin_headers)
    assert response.status_code == 422


def test_list_newest_first_with_filters(client, admin_headers):
    create_invoice(client, admin_headers, invoice_number="A-1", date="2024-08-01")
    create_invoice(client, admin_headers, invoice_number="NC-1", date="2024-08-20", type="nota_credito", supplier_name="Jeans SRL")
    create_invoice(client, admin_headers, invoice_number="A-2", date="2024-08-15", amount=100)

    listing = client.get(API, headers=admin_headers).json()
    assert [i["invoice_number"] for i in listing["invoices"]] == ["NC-1", "A-2", "A-1"]
    assert listing["count"] == 3

    credit = client.get(API, params={"type": "nota_credito"}, headers=admin_headers).json()
    assert [i["invoice_number"] for i in credit["invoices"]] == ["NC-1"]

    search = client.get(API, params={"search": "jeans"}, headers=admin_headers).json()
    assert search["count"] == 1


def test_update_and_delete_invoice(client, admin_headers):
    invoice = create_invoice(client, admin_headers)

    response = client.put(
        f"{API}/{invoice['id']}",
        json={**INVOICE, "type": "nota_debito", "description": "Recargo por flete"},
        headers=admin_headers
    )
    assert response.status_code == 200
    assert response.json()["type"] == "nota_debito"

    assert client.delete(f"{API}/{invoice['id']}", headers=admin_headers).status_code == 200
    assert client.get(f"{API}/{invoice['id']}", headers=admin_headers).status_code == 404


def test_sellers_cannot_see_invoices(client, seller_headers):
    assert client.get(API, headers=seller_headers).status_code == 403
