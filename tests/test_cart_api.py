"""HTTP tests for the /cart routes."""
from decimal import Decimal

import pytest


def money(value) -> Decimal:
    return Decimal(str(value))


async def add(client, product_id, quantity):
    return await client.post("/cart/add", json={"product_id": product_id, "quantity": quantity})


class TestAddToCart:

    async def test_add_returns_201(self, client, pen_id):
        resp = await add(client, pen_id, 3)

        assert resp.status_code == 201
        assert resp.json() == {"message": "Product added to cart successfully"}

    async def test_add_accumulates(self, client, pen_id):
        await add(client, pen_id, 3)
        await add(client, pen_id, 2)

        resp = await client.get(f"/cart/getById/{pen_id}")
        assert resp.status_code == 200
        assert resp.json()["quantity"] == 5

    @pytest.mark.parametrize("body", [
        {},
        {"product_id": 1},
        {"quantity": 1},
        {"product_id": 1, "quantity": 0},
        {"product_id": 1, "quantity": -2},
        {"product_id": 1, "quantity": "2"},
        {"product_id": "abc", "quantity": 1},
        {"product_id": 1, "quantity": True},
        {"product_id": 1, "quantity": 2**31},
        {"product_id": 1, "quantity": 2**70},
        {"product_id": 2**31, "quantity": 1},
        {"product_id": 2**70, "quantity": 1},
    ])
    async def test_add_rejects_malformed_body(self, client, pen_id, body):
        resp = await client.post("/cart/add", json=body)

        assert resp.status_code == 400
        assert resp.json()["detail"]

    async def test_add_unknown_product(self, client, pen_id):
        resp = await add(client, pen_id + 1, 1)

        assert resp.status_code == 400
        assert resp.json() == {"detail": "Product does not exist"}


class TestCartReads:

    async def test_get_by_id_returns_enriched_row(self, client, pen_id):
        await add(client, pen_id, 2)

        resp = await client.get(f"/cart/getById/{pen_id}")
        data = resp.json()
        assert resp.status_code == 200
        assert data["id"] == pen_id
        assert data["item_name"] == "Pen"
        assert data["item_description"] == "Blue pen"
        assert data["item_rating"] == 4
        assert data["item_image"] == "pen.png"
        assert money(data["item_price"]) == Decimal("1.50")
        assert data["quantity"] == 2

    async def test_get_by_id_not_in_cart(self, client, pen_id):
        resp = await client.get(f"/cart/getById/{pen_id}")

        assert resp.status_code == 404
        assert resp.json() == {"detail": "Product not found in the cart"}

    async def test_get_by_id_non_numeric(self, client):
        resp = await client.get("/cart/getById/abc")

        assert resp.status_code == 400

    @pytest.mark.parametrize("product_id", [0, -3, 2**31, 2**70])
    async def test_get_by_id_outside_key_range(self, client, product_id):
        resp = await client.get(f"/cart/getById/{product_id}")

        assert resp.status_code == 404
        assert resp.json() == {"detail": "Product not found in the cart"}

    async def test_get_all_items(self, client, pen_id, lamp_id):
        await add(client, pen_id, 1)
        await add(client, lamp_id, 4)

        resp = await client.get("/cart/getAllItem")
        assert resp.status_code == 200
        quantities = {row["id"]: row["quantity"] for row in resp.json()}
        assert quantities == {pen_id: 1, lamp_id: 4}

    @pytest.mark.parametrize("path", ["/cart/getAllItem", "/cart/totalQuantity", "/cart/summary"])
    async def test_empty_cart_is_404(self, client, pen_id, path):
        resp = await client.get(path)

        assert resp.status_code == 404
        assert resp.json() == {"detail": "Cart is empty"}


class TestDeleteAndPatch:

    async def test_delete_twice(self, client, pen_id):
        await add(client, pen_id, 1)

        first = await client.delete(f"/cart/cart/delete/{pen_id}")
        second = await client.delete(f"/cart/cart/delete/{pen_id}")

        assert first.status_code == 200
        assert first.json() == {"message": "Product removed from cart successfully"}
        assert second.status_code == 404

    async def test_delete_bad_id(self, client):
        resp = await client.delete("/cart/cart/delete/abc")

        assert resp.status_code == 400

    @pytest.mark.parametrize("product_id", [0, 2**31, 2**70])
    async def test_delete_outside_key_range(self, client, product_id):
        resp = await client.delete(f"/cart/cart/delete/{product_id}")

        assert resp.status_code == 404

    async def test_patch_replaces_quantity(self, client, pen_id):
        await add(client, pen_id, 5)

        resp = await client.patch(f"/cart/cart/quantity/{pen_id}", json={"quantity": 2})
        assert resp.status_code == 200
        assert resp.json() == {"message": "Cart updated successfully"}

        line = await client.get(f"/cart/getById/{pen_id}")
        assert line.json()["quantity"] == 2

    async def test_patch_inserts_absent_line(self, client, pen_id):
        resp = await client.patch(f"/cart/cart/quantity/{pen_id}", json={"quantity": 3})

        assert resp.status_code == 200
        assert (await client.get(f"/cart/getById/{pen_id}")).json()["quantity"] == 3

    @pytest.mark.parametrize("body", [
        {}, {"quantity": 0}, {"quantity": -1}, {"quantity": "3"}, {"quantity": 1.5}, {"quantity": 2**70},
    ])
    async def test_patch_rejects_bad_quantity(self, client, pen_id, body):
        resp = await client.patch(f"/cart/cart/quantity/{pen_id}", json=body)

        assert resp.status_code == 400


class TestTotals:

    async def test_pen_scenario(self, client, pen_id):
        await add(client, pen_id, 3)
        totals = (await client.get("/cart/totalQuantity")).json()
        assert totals["total_items"] == 3
        assert money(totals["total_price"]) == Decimal("4.50")

        await add(client, pen_id, 2)
        totals = (await client.get("/cart/totalQuantity")).json()
        assert totals["total_items"] == 5
        assert money(totals["total_price"]) == Decimal("7.50")

        await client.patch(f"/cart/cart/quantity/{pen_id}", json={"quantity": 1})
        totals = (await client.get("/cart/totalQuantity")).json()
        assert totals["total_items"] == 1
        assert money(totals["total_price"]) == Decimal("1.50")

        await client.delete(f"/cart/cart/delete/{pen_id}")
        assert (await client.get("/cart/totalQuantity")).status_code == 404

    async def test_summary(self, client, pen_id, lamp_id):
        await add(client, pen_id, 2)
        await add(client, lamp_id, 1)

        resp = await client.get("/cart/summary")
        data = resp.json()
        assert resp.status_code == 200
        assert data["total_items"] == 3
        assert money(data["total_price"]) == Decimal("27.99")
        assert sorted(item["id"] for item in data["items"]) == sorted([pen_id, lamp_id])

    async def test_add_past_column_limit_is_rejected(self, client, pen_id):
        await client.patch(f"/cart/cart/quantity/{pen_id}", json={"quantity": 2**31 - 1})

        resp = await add(client, pen_id, 1)
        assert resp.status_code == 400
        assert (await client.get(f"/cart/getById/{pen_id}")).json()["quantity"] == 2**31 - 1
