from conftest import auth, register


def place(client, token, items, **extra):
    body = {"items": items, "address": "Almaty, Abai 10", "phone": "+77010000000", **extra}
    response = client.post("/api/orders", json=body, headers=auth(token))
    assert response.status_code == 201, response.text
    return response.json()


def test_stats_require_token(client):
    response = client.get("/api/stats")

    assert response.status_code == 401
    assert response.json() == {"error": "Authorization required"}


def test_customer_cannot_see_stats(client, user_token):
    response = client.get("/api/stats", headers=auth(user_token))

    assert response.status_code == 403
    assert response.json() == {"error": "Access denied"}


def test_stats_on_empty_shop(client, admin_token):
    response = client.get("/api/stats", headers=auth(admin_token))

    assert response.status_code == 200
    assert response.json() == {
        "totalUsers": 1,
        "totalOrders": 0,
        "totalRevenue": 0,
        "popularPizzas": [],
    }


def test_stats_figures(client, admin_token, user_token):
    other = register(client, email="other@example.com")
    place(client, user_token, [{"id": 1, "quantity": 2}])  # 900
    place(client, other, [{"id": 2, "quantity": 3}, {"id": 1, "quantity": 1}])  # 1560 + 450

    stats = client.get("/api/stats", headers=auth(admin_token)).json()

    assert stats["totalUsers"] == 3
    assert stats["totalOrders"] == 2
    assert stats["totalRevenue"] == 900 + 2010
    assert stats["popularPizzas"] == [
        {"name": "Margherita", "total_sold": 3},
        {"name": "Pepperoni", "total_sold": 3},
    ]


def test_cancelled_orders_excluded_from_revenue(client, admin_token, user_token, db_conn):
    first = place(client, user_token, [{"id": 1, "quantity": 1}])
    place(client, user_token, [{"id": 2, "quantity": 1}])

    db_conn.execute("UPDATE orders SET status = 'cancelled' WHERE id = ?", (first["orderId"],))
    db_conn.commit()

    stats = client.get("/api/stats", headers=auth(admin_token)).json()
    assert stats["totalOrders"] == 2
    assert stats["totalRevenue"] == 520


def test_top_items_limited_to_five(client, admin_token, user_token):
    place(client, user_token, [{"id": item_id, "quantity": item_id} for item_id in range(1, 9)])

    popular = client.get("/api/stats", headers=auth(admin_token)).json()["popularPizzas"]

    assert len(popular) == 5
    assert [p["total_sold"] for p in popular] == [8, 7, 6, 5, 4]
    assert popular[0]["name"] == "Diablo"
