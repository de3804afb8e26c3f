#!/usr/bin/env python3
"""Walk a running service through add / update / remove and print each response.

Usage:
    python scripts/run_cart_walkthrough.py [base_url]
"""
import sys

import httpx

BASE_URL = sys.argv[1] if len(sys.argv) > 1 else "http://localhost:5000"


def show(resp: httpx.Response) -> None:
    print(resp.request.method, resp.request.url.path, "->", resp.status_code, resp.text)


def main() -> None:
    with httpx.Client(base_url=BASE_URL, timeout=10.0) as client:
        resp = client.post("/products/add", json={
            "item_name": "Pen",
            "item_price": 1.50,
            "item_description": "Blue pen",
            "item_rating": 4,
            "item_image": "pen.png",
        })
        show(resp)
        resp.raise_for_status()
        product_id = resp.json()["productId"]

        show(client.post("/cart/add", json={"product_id": product_id, "quantity": 3}))
        show(client.get("/cart/totalQuantity"))
        show(client.post("/cart/add", json={"product_id": product_id, "quantity": 2}))
        show(client.get("/cart/totalQuantity"))
        show(client.patch(f"/cart/cart/quantity/{product_id}", json={"quantity": 1}))
        show(client.get("/cart/summary"))
        show(client.delete(f"/cart/cart/delete/{product_id}"))
        show(client.get("/cart/totalQuantity"))


if __name__ == "__main__":
    try:
        main()
    except httpx.HTTPError as e:
        print("Request failed:", e)
        sys.exit(1)
