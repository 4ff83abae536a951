"""
Tests for the customization pricing endpoints.
"""
from pizza_shop.services.topping_pricing import (
    MISSING_REPLACED_TOPPING_ERROR,
    REPLACE_MEAT_WITH_VEGETABLE_ERROR,
)


def replace(new, old, **extra):
    return {"type": "replace", "topping_name": new, "replaced_topping_name": old, **extra}


def add(name, **extra):
    return {"type": "add", "topping_name": name, **extra}


def remove(name):
    return {"type": "remove", "topping_name": name}


def topping_id(client, name):
    return next(t["id"] for t in client.get("/toppings").json() if t["name"] == name)


class TestQuote:
    """POST /customizations/quote"""

    def test_two_replacements_on_large(self, client):
        resp = client.post("/customizations/quote", json={
            "size": '14"',
            "modifications": [replace("Pepperoni", "Mushrooms"), replace("Bacon", "Onions")],
        })
        assert resp.status_code == 200
        data = resp.json()
        assert data["total"] == "6.98"
        assert data["size_tier"] == "large"
        assert data["replacement_count"] == 2
        assert [m["charge"] for m in data["accepted"]] == ["3.49", "3.49"]
        assert data["rejected"] == []

    def test_add_on_small(self, client):
        resp = client.post("/customizations/quote", json={
            "size": '10"',
            "modifications": [add("Extra Cheese")],
        })
        assert resp.json()["total"] == "2.49"

    def test_remove_is_free(self, client):
        resp = client.post("/customizations/quote", json={
            "size": '12"',
            "modifications": [remove("Onions")],
        })
        assert resp.json()["total"] == "0.00"
        assert len(resp.json()["accepted"]) == 1

    def test_topping_by_id(self, client):
        feta_id = topping_id(client, "Feta Cheese")
        resp = client.post("/customizations/quote", json={
            "size": '14"',
            "modifications": [{"type": "add", "topping_id": feta_id}],
        })
        assert resp.status_code == 200
        assert resp.json()["accepted"][0]["topping_name"] == "Feta Cheese"
        assert resp.json()["total"] == "3.49"

    def test_rejected_replacement_reported(self, client):
        resp = client.post("/customizations/quote", json={
            "size": '12"',
            "modifications": [replace("Mushrooms", "Pepperoni"), replace("Onions", "Green Peppers")],
        })
        assert resp.status_code == 200
        data = resp.json()
        assert data["total"] == "0.00"
        assert data["replacement_count"] == 1
        assert len(data["rejected"]) == 1
        rejected = data["rejected"][0]
        assert rejected["index"] == 0
        assert rejected["topping_name"] == "Mushrooms"
        assert rejected["replaced_topping_name"] == "Pepperoni"
        assert rejected["reason"] == REPLACE_MEAT_WITH_VEGETABLE_ERROR

    def test_replace_without_replaced_topping(self, client):
        resp = client.post("/customizations/quote", json={
            "size": '12"',
            "modifications": [{"type": "replace", "topping_name": "Ham"}],
        })
        assert resp.status_code == 200
        assert resp.json()["rejected"][0]["reason"] == MISSING_REPLACED_TOPPING_ERROR

    def test_existing_replacements(self, client):
        resp = client.post("/customizations/quote", json={
            "size": '12"',
            "existing_replacements": 1,
            "modifications": [replace("Onions", "Mushrooms")],
        })
        assert resp.json()["total"] == "2.99"
        assert resp.json()["replacement_count"] == 2

    def test_two_topper_includes_two_adds(self, client):
        resp = client.post("/customizations/quote", json={
            "size": '12"',
            "pizza_name": "Two Topper",
            "modifications": [add("Ham"), add("Pineapple"), add("Bacon")],
        })
        data = resp.json()
        assert [m["charge"] for m in data["accepted"]] == ["0.00", "0.00", "2.99"]
        assert data["total"] == "2.99"
        assert data["free_adds_remaining"] == 0

    def test_unmatched_size_prices_as_medium(self, client):
        resp = client.post("/customizations/quote", json={
            "size": "party",
            "modifications": [add("Ham")],
        })
        assert resp.json()["size_tier"] == "medium"
        assert resp.json()["total"] == "2.99"

    def test_unknown_topping(self, client):
        resp = client.post("/customizations/quote", json={
            "size": '12"',
            "modifications": [add("Gold Leaf")],
        })
        assert resp.status_code == 404
        assert "Gold Leaf" in resp.json()["detail"]

    def test_unavailable_topping(self, client, admin_auth):
        ham_id = topping_id(client, "Ham")
        client.patch(f"/admin/toppings/{ham_id}/availability", json={"is_available": False}, auth=admin_auth)
        resp = client.post("/customizations/quote", json={
            "size": '12"',
            "modifications": [add("Ham")],
        })
        assert resp.status_code == 404

    def test_modification_needs_topping(self, client):
        resp = client.post("/customizations/quote", json={
            "size": '12"',
            "modifications": [{"type": "add"}],
        })
        assert resp.status_code == 422

    def test_negative_existing_replacements(self, client):
        resp = client.post("/customizations/quote", json={
            "size": '12"',
            "existing_replacements": -1,
        })
        assert resp.status_code == 422


class TestValidateReplacement:
    """POST /customizations/validate-replacement"""

    def test_free_swap(self, client):
        resp = client.post("/customizations/validate-replacement", json={
            "original_topping": {"name": "Mushrooms"},
            "new_topping": {"name": "Onions"},
            "size": '14"',
        })
        assert resp.json() == {"is_valid": True, "additional_charge": "0.00", "error_message": None}

    def test_upgrade_charged(self, client):
        resp = client.post("/customizations/validate-replacement", json={
            "original_topping": {"name": "Mushrooms"},
            "new_topping": {"name": "Pepperoni"},
            "size": '12"',
        })
        assert resp.json()["is_valid"] is True
        assert resp.json()["additional_charge"] == "2.99"

    def test_meat_for_vegetable_rejected(self, client):
        resp = client.post("/customizations/validate-replacement", json={
            "original_topping": {"name": "Pepperoni"},
            "new_topping": {"name": "Mushrooms"},
            "size": '12"',
        })
        assert resp.status_code == 200
        data = resp.json()
        assert data["is_valid"] is False
        assert data["additional_charge"] == "0.00"
        assert data["error_message"] == REPLACE_MEAT_WITH_VEGETABLE_ERROR

    def test_after_first_replacement(self, client):
        resp = client.post("/customizations/validate-replacement", json={
            "original_topping": {"name": "Pepperoni"},
            "new_topping": {"name": "Mushrooms"},
            "size": '10"',
            "existing_replacements": 1,
        })
        assert resp.json()["is_valid"] is True
        assert resp.json()["additional_charge"] == "2.49"

    def test_unknown_topping(self, client):
        resp = client.post("/customizations/validate-replacement", json={
            "original_topping": {"name": "Pepperoni"},
            "new_topping": {"name": "Gold Leaf"},
            "size": '10"',
        })
        assert resp.status_code == 404

    def test_reference_required(self, client):
        resp = client.post("/customizations/validate-replacement", json={
            "original_topping": {},
            "new_topping": {"name": "Ham"},
            "size": '10"',
        })
        assert resp.status_code == 422


class TestSplitEligibility:
    """GET /customizations/split-eligibility"""

    def test_medium(self, client):
        resp = client.get("/customizations/split-eligibility", params={"size": '12"'})
        assert resp.json() == {"size": '12"', "size_tier": "medium", "is_gluten_free": False, "can_split": True}

    def test_small(self, client):
        resp = client.get("/customizations/split-eligibility", params={"size": '10"'})
        assert resp.json()["can_split"] is False

    def test_gluten_free(self, client):
        resp = client.get(
            "/customizations/split-eligibility",
            params={"size": '14"', "is_gluten_free": "true"},
        )
        assert resp.json()["can_split"] is False


class TestHalfAndHalfQuote:
    """POST /customizations/half-and-half/quote"""

    def test_more_expensive_half_wins(self, client):
        resp = client.post("/customizations/half-and-half/quote", json={
            "size": '12"',
            "left": {"pizza_name": "Pepperoni"},
            "right": {"pizza_name": "Hawaiian", "modifications": [add("Bacon")]},
        })
        assert resp.status_code == 200
        data = resp.json()
        assert data["left"]["total"] == "15.99"
        assert data["right"]["base_price"] == "16.99"
        assert data["right"]["customization_total"] == "2.99"
        assert data["right"]["total"] == "19.98"
        assert data["total"] == "19.98"

    def test_default_and_current_toppings(self, client):
        resp = client.post("/customizations/half-and-half/quote", json={
            "size": '14"',
            "left": {"pizza_name": "Hawaiian", "modifications": [remove("Pineapple"), add("Bacon")]},
            "right": {"pizza_name": "Pepperoni"},
        })
        left = resp.json()["left"]
        assert left["default_toppings"] == ["Ham", "Pineapple"]
        assert left["current_toppings"] == ["Ham", "Bacon"]

    def test_rejections_tagged_with_side(self, client):
        resp = client.post("/customizations/half-and-half/quote", json={
            "size": '14"',
            "left": {"pizza_name": "Pepperoni"},
            "right": {"pizza_name": "Hawaiian", "modifications": [replace("Mushrooms", "Ham")]},
        })
        rejected = resp.json()["right"]["rejected"]
        assert len(rejected) == 1
        assert rejected[0]["side"] == "right"
        assert resp.json()["right"]["current_toppings"] == ["Ham", "Pineapple"]

    def test_small_cannot_split(self, client):
        resp = client.post("/customizations/half-and-half/quote", json={
            "size": '10"',
            "left": {"pizza_name": "Pepperoni"},
            "right": {"pizza_name": "Hawaiian"},
        })
        assert resp.status_code == 400

    def test_gluten_free_cannot_split(self, client):
        resp = client.post("/customizations/half-and-half/quote", json={
            "size": '12"',
            "is_gluten_free": True,
            "left": {},
            "right": {},
        })
        assert resp.status_code == 400
        assert "gluten-free" in resp.json()["detail"]

    def test_size_not_offered(self, client):
        resp = client.post("/customizations/half-and-half/quote", json={
            "size": '14"',
            "left": {"pizza_name": "Gluten-Free Pepperoni"},
            "right": {"pizza_name": "Pepperoni"},
        })
        assert resp.status_code == 400

    def test_unknown_pizza(self, client):
        resp = client.post("/customizations/half-and-half/quote", json={
            "size": '14"',
            "left": {"pizza_name": "Calzone"},
            "right": {"pizza_name": "Pepperoni"},
        })
        assert resp.status_code == 404


def test_quote_rate_limit_returns_429_when_exceeded(client, monkeypatch):
    """The quote endpoint is rate limited per client."""
    import pizza_shop.config as config_mod
    from pizza_shop.routes import limiter

    monkeypatch.setattr(config_mod, "RATE_LIMIT_QUOTE", "2 per minute")
    limiter.enabled = True
    limiter.reset()

    try:
        body = {"size": '12"', "modifications": [add("Ham")]}
        assert client.post("/customizations/quote", json=body).status_code == 200
        assert client.post("/customizations/quote", json=body).status_code == 200
        assert client.post("/customizations/quote", json=body).status_code == 429
    finally:
        limiter.enabled = False
        limiter.reset()
