def test_calculator_returns_yield(client):
    response = client.post("/zinsrechner/", json={"betrag": 10000, "zinssatz": 3.5, "laufzeit_monate": 12})
    assert response.status_code == 200
    result = response.json()
    assert result["zinsbetrag"] == 350.0
    assert result["endbetrag"] == 10350.0
    assert result["monatliche_zinsen"] == 29.17
    assert result["rendite_prozent"] == 3.5
    assert len(result["monatsuebersicht"]) == 12
    assert result["monatsuebersicht"][-1] == {
        "monat": 12,
        "zinsen_monat": 29.17,
        "zinsen_gesamt": 350.0,
        "kontostand": 10350.0,
    }


def test_calculator_schedule_is_limited_to_two_years(client):
    response = client.post("/zinsrechner/", json={"betrag": 5000, "zinssatz": 2, "laufzeit_monate": 60})
    result = response.json()
    assert result["zinsbetrag"] == 500.0
    assert len(result["monatsuebersicht"]) == 24


def test_calculator_needs_no_login(client):
    response = client.post("/zinsrechner/", json={"betrag": 1, "zinssatz": 0, "laufzeit_monate": 1})
    assert response.status_code == 200
    assert response.json()["endbetrag"] == 1.0


def test_calculator_rejects_invalid_input(client):
    for payload in (
        {"betrag": 0, "zinssatz": 3, "laufzeit_monate": 12},
        {"betrag": 1000, "zinssatz": -3, "laufzeit_monate": 12},
        {"betrag": 1000, "zinssatz": 3, "laufzeit_monate": 0},
        {"betrag": "viel", "zinssatz": 3, "laufzeit_monate": 12},
    ):
        response = client.post("/zinsrechner/", json=payload)
        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"
