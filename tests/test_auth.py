ADMIN = ("admin@onlinekonto.de", "admin123")
CUSTOMER = ("user@onlinekonto.de", "user123")


def test_login_returns_identity_and_token(seeded_client):
    response = seeded_client.post("/auth/login", data={"username": ADMIN[0], "password": ADMIN[1]})
    assert response.status_code == 200
    body = response.json()
    assert body["email"] == ADMIN[0]
    assert body["role"] == "admin"
    assert body["token_type"] == "bearer"
    assert body["access_token"]
    assert "password" not in body


def test_login_email_is_case_insensitive(seeded_client):
    response = seeded_client.post("/auth/login", data={"username": "USER@Onlinekonto.de", "password": CUSTOMER[1]})
    assert response.status_code == 200
    assert response.json()["role"] == "user"


def test_login_with_wrong_password_fails(seeded_client):
    response = seeded_client.post("/auth/login", data={"username": ADMIN[0], "password": "wrong"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Ungültige Anmeldedaten"


def test_login_with_unknown_email_fails(seeded_client):
    response = seeded_client.post("/auth/login", data={"username": "nobody@example.com", "password": "x"})
    assert response.status_code == 401


def test_me_returns_current_user(seeded_client, customer_headers):
    response = seeded_client.get("/auth/me", headers=customer_headers)
    assert response.status_code == 200
    assert response.json()["email"] == CUSTOMER[0]


def test_protected_routes_require_token(seeded_client):
    assert seeded_client.get("/auth/me").status_code == 401
    assert seeded_client.get("/anlagen/").status_code == 401
    bad = {"Authorization": "Bearer not-a-token"}
    assert seeded_client.get("/auth/me", headers=bad).status_code == 401


def test_admin_routes_reject_customers(seeded_client, customer_headers):
    assert seeded_client.get("/users/", headers=customer_headers).status_code == 403
    assert seeded_client.get("/admin/dashboard", headers=customer_headers).status_code == 403
