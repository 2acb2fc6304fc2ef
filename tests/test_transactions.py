def test_customer_sees_own_transactions(seeded_client, customer_headers, customer_id):
    response = seeded_client.get("/transaktionen/", headers=customer_headers)
    assert response.status_code == 200
    transaktionen = response.json()
    assert len(transaktionen) == 2
    assert all(t["user_id"] == customer_id for t in transaktionen)
    assert all(t["typ"] == "einzahlung" for t in transaktionen)
    # newest first
    assert transaktionen[0]["betrag"] == 25000.0
    assert transaktionen[0]["user"]["name"] == "Max Mustermann"


def test_customer_cannot_read_foreign_transactions(seeded_client, pending_headers, customer_id):
    response = seeded_client.get(f"/transaktionen/?user_id={customer_id}", headers=pending_headers)
    assert response.status_code == 200
    assert response.json() == []


def test_limit(seeded_client, admin_headers):
    response = seeded_client.get("/transaktionen/?limit=1", headers=admin_headers)
    assert len(response.json()) == 1


def test_book_interest_credit(seeded_client, admin_headers, customer_id):
    anlage_id = seeded_client.get("/anlagen/", headers=admin_headers).json()[0]["id"]
    payload = {
        "user_id": customer_id,
        "anlage_id": anlage_id,
        "typ": "zinsgutschrift",
        "betrag": 29.17,
        "beschreibung": "Zinsgutschrift Januar",
    }
    response = seeded_client.post("/transaktionen/", json=payload, headers=admin_headers)
    assert response.status_code == 201
    transaktion = response.json()
    assert transaktion["typ"] == "zinsgutschrift"
    assert transaktion["betrag"] == 29.17
    assert transaktion["anlage_id"] == anlage_id
    assert transaktion["user"]["id"] == customer_id

    latest = seeded_client.get("/transaktionen/?limit=1", headers=admin_headers).json()[0]
    assert latest["id"] == transaktion["id"]


def test_book_transaction_without_deposit(seeded_client, admin_headers, pending_id):
    payload = {"user_id": pending_id, "typ": "einzahlung", "betrag": 100}
    response = seeded_client.post("/transaktionen/", json=payload, headers=admin_headers)
    assert response.status_code == 201
    assert response.json()["anlage_id"] is None


def test_book_transaction_for_foreign_deposit(seeded_client, admin_headers, pending_id):
    anlage_id = seeded_client.get("/anlagen/", headers=admin_headers).json()[0]["id"]
    payload = {"user_id": pending_id, "anlage_id": anlage_id, "typ": "zinsgutschrift", "betrag": 10}
    response = seeded_client.post("/transaktionen/", json=payload, headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_INPUT"


def test_book_transaction_for_unknown_targets(seeded_client, admin_headers, customer_id):
    unknown_user = {"user_id": "doesnotexist", "typ": "einzahlung", "betrag": 10}
    assert seeded_client.post("/transaktionen/", json=unknown_user, headers=admin_headers).status_code == 404

    unknown_anlage = {"user_id": customer_id, "anlage_id": 9999, "typ": "einzahlung", "betrag": 10}
    assert seeded_client.post("/transaktionen/", json=unknown_anlage, headers=admin_headers).status_code == 404


def test_book_transaction_validation(seeded_client, admin_headers, customer_id):
    for payload in (
        {"user_id": customer_id, "typ": "einzahlung", "betrag": 0},
        {"user_id": customer_id, "typ": "storno", "betrag": 10},
    ):
        response = seeded_client.post("/transaktionen/", json=payload, headers=admin_headers)
        assert response.status_code == 400


def test_customers_cannot_book_transactions(seeded_client, customer_headers, customer_id):
    payload = {"user_id": customer_id, "typ": "einzahlung", "betrag": 10}
    assert seeded_client.post("/transaktionen/", json=payload, headers=customer_headers).status_code == 403
