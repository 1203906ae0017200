def test_create_expense(client, team_code):
    res = client.post("/api/expenses", json={
        "team_code": team_code, "description": "Lunch", "amount": 50.0,
        "paid_by": "Alice", "split_between": ["Alice", "Bob"],
    })
    assert res.status_code == 200
    data = res.json()
    assert data["amount"] == 50.0
    assert data["paid_by"] == "Alice"
    assert data["split_between"] == ["Alice", "Bob"]
    assert data["team_code"] == team_code


def test_split_defaults_to_all_members(add_expense):
    data = add_expense(90.0, "Bob")
    assert data["split_between"] == ["Alice", "Bob", "Carol"]


def test_duplicate_split_members_collapse(add_expense):
    data = add_expense(20.0, "Bob", ["Bob", "Carol", "Bob"])
    assert data["split_between"] == ["Bob", "Carol"]


def test_reject_non_positive_amount(client, team_code):
    for amount in (0, -5.0):
        res = client.post("/api/expenses", json={
            "team_code": team_code, "description": "Bad", "amount": amount, "paid_by": "Alice",
        })
        assert res.status_code == 400
        assert res.json()["detail"] == "Amount must be positive"


def test_reject_blank_description(client, team_code):
    res = client.post("/api/expenses", json={
        "team_code": team_code, "description": "   ", "amount": 10.0, "paid_by": "Alice",
    })
    assert res.status_code == 400


def test_reject_outsider_payer(client, team_code):
    res = client.post("/api/expenses", json={
        "team_code": team_code, "description": "Taxi", "amount": 10.0, "paid_by": "Mallory",
    })
    assert res.status_code == 400
    assert "Mallory" in res.json()["detail"]


def test_reject_outsider_in_split(client, team_code):
    res = client.post("/api/expenses", json={
        "team_code": team_code, "description": "Taxi", "amount": 10.0,
        "paid_by": "Alice", "split_between": ["Alice", "Mallory"],
    })
    assert res.status_code == 400


def test_expense_for_unknown_group(client):
    res = client.post("/api/expenses", json={
        "team_code": "NOPE0000", "description": "Taxi", "amount": 10.0, "paid_by": "Alice",
    })
    assert res.status_code == 404


def test_list_expenses(client, team_code, add_expense):
    for i in range(3):
        add_expense(10.0 * (i + 1), "Alice", description=f"Expense {i}")
    res = client.get(f"/api/expenses?team_code={team_code}")
    assert res.status_code == 200
    assert len(res.json()) == 3


def test_search_expenses(client, team_code, add_expense):
    add_expense(20.0, "Alice", description="Coffee")
    add_expense(30.0, "Alice", description="Pizza")
    res = client.get(f"/api/expenses?team_code={team_code}&search=coffee")
    assert len(res.json()) == 1
    assert res.json()[0]["description"] == "Coffee"


def test_search_treats_wildcards_literally(client, team_code, add_expense):
    add_expense(20.0, "Alice", description="Coffee")
    add_expense(30.0, "Alice", description="Pizza 50% off")
    add_expense(15.0, "Alice", description="snack_bar")
    res = client.get("/api/expenses", params={"team_code": team_code, "search": "%"})
    assert [e["description"] for e in res.json()] == ["Pizza 50% off"]
    res = client.get("/api/expenses", params={"team_code": team_code, "search": "_"})
    assert [e["description"] for e in res.json()] == ["snack_bar"]


def test_reject_amount_above_limit(client, team_code):
    res = client.post("/api/expenses", json={
        "team_code": team_code, "description": "Yacht", "amount": 1e308, "paid_by": "Alice",
    })
    assert res.status_code == 400
    assert "exceed" in res.json()["detail"]


def test_get_expense(client, add_expense):
    eid = add_expense(12.5, "Carol", ["Carol"], description="Snacks")["id"]
    res = client.get(f"/api/expenses/{eid}")
    assert res.status_code == 200
    assert res.json()["description"] == "Snacks"


def test_delete_expense(client, team_code, add_expense):
    eid = add_expense(10.0, "Alice", description="Del")["id"]
    res = client.delete(f"/api/expenses/{eid}")
    assert res.status_code == 204
    assert client.get(f"/api/expenses/{eid}").status_code == 404
    assert client.get(f"/api/expenses?team_code={team_code}").json() == []


def test_delete_missing_expense(client):
    res = client.delete("/api/expenses/999")
    assert res.status_code == 404


def test_export_csv(client, team_code, add_expense):
    add_expense(50.0, "Alice", ["Alice", "Bob"], description="Dinner")
    res = client.get(f"/api/expenses/export?team_code={team_code}")
    assert res.status_code == 200
    assert "text/csv" in res.headers["content-type"]
    assert "Dinner" in res.text
    assert "25.00" in res.text
