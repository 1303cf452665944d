def test_list_all_pizzas(client):
    response = client.get("/api/pizzas")

    assert response.status_code == 200
    pizzas = response.json()
    assert len(pizzas) == 8
    assert [p["id"] for p in pizzas] == sorted(p["id"] for p in pizzas)
    assert pizzas[0]["name"] == "Margherita"
    assert pizzas[0]["price"] == 450


def test_category_all_returns_everything(client):
    assert client.get("/api/pizzas?category=all").json() == client.get("/api/pizzas").json()


def test_filter_by_category(client):
    response = client.get("/api/pizzas", params={"category": "meat"})

    pizzas = response.json()
    assert {p["name"] for p in pizzas} == {"Pepperoni", "Hawaiian", "Carbonara"}
    assert all(p["category"] == "meat" for p in pizzas)


def test_unknown_category_is_empty(client):
    response = client.get("/api/pizzas", params={"category": "dessert"})

    assert response.status_code == 200
    assert response.json() == []


def test_unavailable_items_still_listed(client, db_conn):
    db_conn.execute("UPDATE menu_items SET is_available = 0 WHERE name = 'Diablo'")
    db_conn.commit()

    pizzas = client.get("/api/pizzas", params={"category": "spicy"}).json()

    diablo = next(p for p in pizzas if p["name"] == "Diablo")
    assert diablo["is_available"] is False


def test_seed_is_not_repeated_on_restart(client):
    from fastapi.testclient import TestClient
    from pizzahub.main import app

    with TestClient(app) as again:
        assert len(again.get("/api/pizzas").json()) == 8


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"
