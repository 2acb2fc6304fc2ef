import re


def new_user_payload(**overrides):
    payload = {"name": "Erika Musterfrau", "email": "erika@example.com"}
    payload.update(overrides)
    return payload


def terminate_all_deposits(client, admin_headers, user_id):
    for anlage in client.get(f"/anlagen/?user_id={user_id}", headers=admin_headers).json():
        if anlage["status"] == "aktiv":
            response = client.put(f"/anlagen/{anlage['id']}", json={"status": "beendet"}, headers=admin_headers)
            assert response.status_code == 200


def test_admin_lists_users_newest_first(seeded_client, admin_headers):
    seeded_client.post("/users/", json=new_user_payload(), headers=admin_headers)
    response = seeded_client.get("/users/", headers=admin_headers)
    assert response.status_code == 200
    users = response.json()
    assert len(users) == 4
    assert users[0]["email"] == "erika@example.com"
    assert all("password" not in user for user in users)


def test_create_user_applies_defaults(seeded_client, admin_headers, login):
    response = seeded_client.post("/users/", json=new_user_payload(email="Erika@Example.com"), headers=admin_headers)
    assert response.status_code == 201
    user = response.json()
    assert user["email"] == "erika@example.com"
    assert user["role"] == "user"
    assert user["kyc_status"] == "pending"
    assert user["country"] == "Deutschland"
    assert re.fullmatch(r"OK-\d{4}-[A-Z0-9]{6}", user["account_number"])
    # default password
    assert login("erika@example.com", "password123")


def test_create_user_with_full_profile(seeded_client, admin_headers):
    payload = new_user_payload(
        password="geheim123",
        role="admin",
        kyc_status="verified",
        account_number="OK-2025-ERIKA1",
        street="Lindenallee 5",
        postal_code="50667",
        city="Köln",
        reference_iban="de44 5001 0517 5407 3249 31",
        reference_bic="INGDDEFFXXX",
        reference_bank_name="ING",
    )
    response = seeded_client.post("/users/", json=payload, headers=admin_headers)
    assert response.status_code == 201
    user = response.json()
    assert user["role"] == "admin"
    assert user["account_number"] == "OK-2025-ERIKA1"
    assert user["reference_iban"] == "DE44500105175407324931"


def test_create_user_with_existing_email_conflicts(seeded_client, admin_headers):
    response = seeded_client.post("/users/", json=new_user_payload(email="USER@onlinekonto.de"), headers=admin_headers)
    assert response.status_code == 409
    assert response.json()["code"] == "EMAIL_TAKEN"


def test_create_user_requires_name_and_email(seeded_client, admin_headers):
    response = seeded_client.post("/users/", json={"email": "x@example.com"}, headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_create_user_rejects_invalid_iban(seeded_client, admin_headers):
    response = seeded_client.post("/users/", json=new_user_payload(reference_iban="12345"), headers=admin_headers)
    assert response.status_code == 400


def test_user_detail_includes_stats_and_display_fields(seeded_client, customer_headers, customer_id):
    response = seeded_client.get(f"/users/{customer_id}", headers=customer_headers)
    assert response.status_code == 200
    user = response.json()
    assert user["stats"] == {"anlagen_count": 2, "transaktionen_count": 2}
    assert user["address"] == "Musterstraße 123, 80331 München"
    assert user["kyc_status_label"] == "Verifiziert"
    assert user["reference_iban_masked"].endswith("3001")
    assert user["reference_iban_masked"].startswith("*")


def test_customer_cannot_read_other_users(seeded_client, customer_headers, admin_id):
    response = seeded_client.get(f"/users/{admin_id}", headers=customer_headers)
    assert response.status_code == 403


def test_unknown_user_is_not_found(seeded_client, admin_headers):
    assert seeded_client.get("/users/doesnotexist", headers=admin_headers).status_code == 404
    assert seeded_client.delete("/users/doesnotexist", headers=admin_headers).status_code == 404


def test_customer_updates_own_profile(seeded_client, customer_headers, customer_id):
    payload = {"name": "Max Mustermann", "email": "user@onlinekonto.de", "city": "Augsburg", "street": ""}
    response = seeded_client.put(f"/users/{customer_id}", json=payload, headers=customer_headers)
    assert response.status_code == 200
    user = response.json()
    assert user["city"] == "Augsburg"
    assert user["street"] is None
    # untouched fields survive
    assert user["postal_code"] == "80331"


def test_customer_cannot_change_privileged_fields(seeded_client, customer_headers, customer_id):
    payload = {"name": "Max Mustermann", "email": "user@onlinekonto.de", "role": "admin"}
    response = seeded_client.put(f"/users/{customer_id}", json=payload, headers=customer_headers)
    assert response.status_code == 403


def test_admin_changes_role_and_kyc_status(seeded_client, admin_headers, pending_id):
    payload = {"name": "Thomas Weber", "email": "thomas@onlinekonto.de", "role": "admin", "kyc_status": "verified"}
    response = seeded_client.put(f"/users/{pending_id}", json=payload, headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["role"] == "admin"
    assert response.json()["kyc_status"] == "verified"


def test_update_password(seeded_client, customer_headers, customer_id, login):
    payload = {"name": "Max Mustermann", "email": "user@onlinekonto.de", "password": "neues-passwort"}
    response = seeded_client.put(f"/users/{customer_id}", json=payload, headers=customer_headers)
    assert response.status_code == 200
    assert login("user@onlinekonto.de", "neues-passwort")


def test_update_rejects_short_password(seeded_client, customer_headers, customer_id):
    payload = {"name": "Max Mustermann", "email": "user@onlinekonto.de", "password": "123"}
    response = seeded_client.put(f"/users/{customer_id}", json=payload, headers=customer_headers)
    assert response.status_code == 400


def test_update_rejects_email_of_other_user(seeded_client, customer_headers, customer_id):
    payload = {"name": "Max Mustermann", "email": "admin@onlinekonto.de"}
    response = seeded_client.put(f"/users/{customer_id}", json=payload, headers=customer_headers)
    assert response.status_code == 409


def test_delete_user_with_active_deposit_fails(seeded_client, admin_headers, customer_id):
    response = seeded_client.delete(f"/users/{customer_id}", headers=admin_headers)
    assert response.status_code == 409
    assert response.json()["code"] == "USER_HAS_ACTIVE_ANLAGEN"
    assert seeded_client.get(f"/users/{customer_id}", headers=admin_headers).status_code == 200


def test_delete_sole_admin_fails(seeded_client, admin_headers, admin_id):
    response = seeded_client.delete(f"/users/{admin_id}", headers=admin_headers)
    assert response.status_code == 409
    assert response.json()["code"] == "LAST_ADMIN"


def test_delete_admin_when_another_admin_exists(seeded_client, admin_headers, admin_id):
    seeded_client.post("/users/", json=new_user_payload(role="admin"), headers=admin_headers)
    response = seeded_client.delete(f"/users/{admin_id}", headers=admin_headers)
    assert response.status_code == 200


def test_delete_user_without_deposits(seeded_client, admin_headers, pending_id):
    response = seeded_client.delete(f"/users/{pending_id}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["message"] == "Benutzer erfolgreich gelöscht"
    assert seeded_client.get(f"/users/{pending_id}", headers=admin_headers).status_code == 404


def test_delete_user_removes_terminated_deposits_and_transactions(seeded_client, admin_headers, customer_id):
    terminate_all_deposits(seeded_client, admin_headers, customer_id)

    response = seeded_client.delete(f"/users/{customer_id}", headers=admin_headers)
    assert response.status_code == 200
    assert seeded_client.get(f"/anlagen/?user_id={customer_id}", headers=admin_headers).json() == []
    assert seeded_client.get(f"/transaktionen/?user_id={customer_id}", headers=admin_headers).json() == []


def test_customers_cannot_create_or_delete_users(seeded_client, customer_headers, admin_id):
    assert seeded_client.post("/users/", json=new_user_payload(), headers=customer_headers).status_code == 403
    assert seeded_client.delete(f"/users/{admin_id}", headers=customer_headers).status_code == 403
