from decimal import Decimal

import pytest

from storefront.domain.errors import ValidationError
from storefront.services.cart_service import CartService


def _add(client, auth, product_id, quantity=1):
    return client.post("/cart/items", json={"product_id": product_id, "quantity": quantity}, headers=auth)


class TestAuthentication:
    def test_missing_principal(self, client, user):
        assert client.get("/cart").status_code == 401

    def test_unknown_principal(self, client, user):
        assert client.get("/cart", headers={"X-User-Id": "999"}).status_code == 401


class TestCartEndpoints:
    def test_add_item(self, client, auth, user, products):
        response = _add(client, auth, products["mug"].id, 2)

        assert response.status_code == 200
        body = response.json()
        assert body["quantity"] == 2
        assert body["product"]["name"] == "Ceramic Mug"

    def test_readding_increments_quantity(self, client, auth, user, products):
        _add(client, auth, products["mug"].id, 1)
        _add(client, auth, products["mug"].id, 3)

        items = client.get("/cart", headers=auth).json()["items"]
        assert len(items) == 1
        assert items[0]["quantity"] == 4

    def test_add_unknown_product(self, client, auth, user):
        assert _add(client, auth, 12345).status_code == 404

    def test_add_zero_quantity(self, client, auth, user, products):
        assert _add(client, auth, products["mug"].id, 0).status_code == 422

    def test_cart_includes_pricing(self, client, auth, user, products):
        _add(client, auth, products["mug"].id, 2)

        pricing = client.get("/cart", headers=auth).json()["pricing"]
        assert Decimal(pricing["subtotal"]) == Decimal("40.00")
        assert Decimal(pricing["total"]) == Decimal("53.99")

    def test_set_quantity(self, client, auth, user, products):
        line_id = _add(client, auth, products["mug"].id).json()["id"]

        response = client.patch(f"/cart/items/{line_id}", json={"quantity": 5}, headers=auth)

        assert response.status_code == 200
        assert response.json()["quantity"] == 5

    def test_set_quantity_on_foreign_line(self, client, auth, user, products):
        line_id = _add(client, {"X-User-Id": "2"}, products["mug"].id).json()["id"]

        response = client.patch(f"/cart/items/{line_id}", json={"quantity": 5}, headers=auth)
        assert response.status_code == 403

    def test_remove_item(self, client, auth, user, products):
        line_id = _add(client, auth, products["mug"].id).json()["id"]

        assert client.delete(f"/cart/items/{line_id}", headers=auth).status_code == 200
        assert client.get("/cart", headers=auth).json()["items"] == []
        assert client.delete(f"/cart/items/{line_id}", headers=auth).status_code == 404

    def test_clear_cart(self, client, auth, user, products):
        _add(client, auth, products["mug"].id)
        _add(client, auth, products["lamp"].id)

        response = client.delete("/cart", headers=auth)

        assert response.json() == {"removed": 2}
        assert client.get("/cart", headers=auth).json()["items"] == []


def test_service_rejects_quantity_below_one(db, user, products):
    svc = CartService(db)
    line = svc.add(user.id, products["mug"].id, 1)

    with pytest.raises(ValidationError):
        svc.set_quantity(user.id, line.id, 0)
    with pytest.raises(ValidationError):
        svc.add(user.id, products["mug"].id, 0)
