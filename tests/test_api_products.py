"""Tests for the product and product root endpoints."""
from unittest.mock import patch

import storefront.extensions as ext
from storefront.models import Webhook


def create_shirt(client, shirt_body):
    resp = client.post("/v1/product", json=shirt_body)
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()


def test_create_product(client, shirt_body):
    root = create_shirt(client, shirt_body)

    assert root["sku_prefix"] == "shirt"
    assert len(root["products"]) == 4
    assert len(root["options"]) == 2
    assert root["images"] == []
    assert root["products"][0]["price"] == 20


def test_create_product_rejects_invalid_sku(client, shirt_body):
    shirt_body["sku"] = "shirt 2"
    resp = client.post("/v1/product", json=shirt_body)
    assert resp.status_code == 400
    data = resp.get_json()
    assert data["status"] == 400
    assert "sku" in data["message"]


def test_create_product_rejects_unknown_fields(client, shirt_body):
    shirt_body["colour"] = "red"
    resp = client.post("/v1/product", json=shirt_body)
    assert resp.status_code == 400


def test_create_product_requires_json_object(client):
    resp = client.post("/v1/product", data="not json", content_type="text/plain")
    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Invalid input provided in request body"

    resp = client.post("/v1/product", json=["a", "list"])
    assert resp.status_code == 400


def test_create_product_duplicate_sku(client, shirt_body):
    create_shirt(client, shirt_body)
    resp = client.post("/v1/product", json=shirt_body)
    assert resp.status_code == 400
    assert resp.get_json()["message"] == "product with sku 'shirt' already exists"


def test_create_product_with_generated_sku_taken(client, shirt_body):
    create_shirt(client, shirt_body)
    resp = client.post("/v1/product", json={"name": "Clash", "sku": "shirt_red_s"})
    assert resp.status_code == 400


def test_internal_errors_do_not_leak(client, shirt_body):
    with patch(
        "storefront.services.product_service.persist_variants",
        side_effect=RuntimeError("password=hunter2"),
    ):
        resp = client.post("/v1/product", json=shirt_body)

    assert resp.status_code == 500
    assert resp.get_json() == {"status": 500, "message": "Unexpected internal error occurred"}
    assert client.get("/v1/product_roots").get_json()["count"] == 0


def test_get_product(client, shirt_body):
    create_shirt(client, shirt_body)
    resp = client.get("/v1/product/shirt_blue_m")
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["option_summary"] == "color: blue, size: M"
    assert [o["value"] for o in data["applicable_options"]] == ["blue", "M"]


def test_get_missing_product(client):
    resp = client.get("/v1/product/nope")
    assert resp.status_code == 404
    assert resp.get_json() == {
        "status": 404,
        "message": "The product you were looking for (sku 'nope') does not exist",
    }


def test_head_product(client, shirt_body):
    create_shirt(client, shirt_body)
    assert client.head("/v1/product/shirt_red_s").status_code == 200
    assert client.head("/v1/product/shirt_red_xl").status_code == 404


def test_update_product(client, shirt_body, task_queue, db):
    create_shirt(client, shirt_body)
    db.session.add(Webhook(url="http://hooks.test/updated", event_type="product_updated"))
    db.session.commit()

    resp = client.patch("/v1/product/shirt_red_s", json={"price": 25.5, "quantity": 7})
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["price"] == 25.5
    assert data["quantity"] == 7
    assert data["updated_on"] is not None

    assert task_queue.enqueue.call_count == 1
    _, webhook_id, payload = task_queue.enqueue.call_args.args
    assert payload["sku"] == "shirt_red_s"


def test_update_product_rejects_empty_body(client, shirt_body):
    create_shirt(client, shirt_body)
    resp = client.patch("/v1/product/shirt_red_s", json={})
    assert resp.status_code == 400


def test_update_product_to_taken_sku(client, shirt_body):
    create_shirt(client, shirt_body)
    resp = client.patch("/v1/product/shirt_red_s", json={"sku": "shirt_red_m"})
    assert resp.status_code == 400
    assert "already exists" in resp.get_json()["message"]


def test_update_missing_product(client):
    resp = client.patch("/v1/product/nope", json={"price": 1})
    assert resp.status_code == 404


def test_archive_product(client, shirt_body):
    create_shirt(client, shirt_body)
    resp = client.delete("/v1/product/shirt_red_s")
    assert resp.status_code == 200
    assert resp.get_json()["archived_on"] is not None

    assert client.get("/v1/product/shirt_red_s").status_code == 404
    assert client.get("/v1/products").get_json()["count"] == 3
    assert client.get("/v1/products?include_archived=true").get_json()["count"] == 4


def test_list_products_paginates(client, shirt_body):
    create_shirt(client, shirt_body)
    resp = client.get("/v1/products?limit=3&page=2")
    data = resp.get_json()
    assert data["count"] == 4
    assert data["limit"] == 3
    assert data["page"] == 2
    assert [p["sku"] for p in data["data"]] == ["shirt_blue_m"]


def test_list_products_clamps_limit(client, app):
    resp = client.get("/v1/products?limit=500")
    assert resp.get_json()["limit"] == app.config["MAX_PAGE_SIZE"]


def test_product_roots(client, shirt_body):
    root = create_shirt(client, shirt_body)

    listing = client.get("/v1/product_roots").get_json()
    assert listing["count"] == 1
    assert len(listing["data"][0]["products"]) == 4

    detail = client.get(f"/v1/product_root/{root['id']}").get_json()
    assert detail["sku_prefix"] == "shirt"
    assert len(detail["options"]) == 2
    assert detail["images"] == []


def test_archive_product_root(client, shirt_body):
    root = create_shirt(client, shirt_body)

    resp = client.delete(f"/v1/product_root/{root['id']}")
    assert resp.status_code == 200
    assert resp.get_json()["archived_on"] is not None

    assert client.get(f"/v1/product_root/{root['id']}").status_code == 404
    assert client.get("/v1/products").get_json()["count"] == 0
    assert client.get(f"/v1/product/{root['id']}/options").status_code == 404

    # the prefix is free again
    create_shirt(client, shirt_body)


def test_missing_product_root(client):
    resp = client.get("/v1/product_root/999")
    assert resp.status_code == 404
    assert "product root" in resp.get_json()["message"]


def test_unknown_route_is_json(client):
    resp = client.get("/v1/nothing-here")
    assert resp.status_code == 404
    assert resp.get_json()["status"] == 404


def test_no_queue_means_deliveries_are_dropped(client, shirt_body, db, monkeypatch):
    monkeypatch.setattr(ext, "task_queue", ext.DummyQueue())
    db.session.add(Webhook(url="http://hooks.test/created", event_type="product_created"))
    db.session.commit()
    # delivery is skipped, the request still succeeds
    create_shirt(client, shirt_body)


def test_option_values_differing_only_by_case_are_rejected(client):
    resp = client.post(
        "/v1/product",
        json={"name": "Shirt", "sku": "shirt", "options": [{"name": "size", "values": ["S", "s"]}]},
    )
    assert resp.status_code == 400
    assert "ignoring case" in resp.get_json()["message"]
    assert client.get("/v1/product_roots").get_json()["count"] == 0


def test_generated_sku_clash_names_the_taken_sku(client):
    assert client.post("/v1/product", json={"name": "Red shirt", "sku": "shirt_red"}).status_code == 201

    resp = client.post(
        "/v1/product",
        json={"name": "Shirt", "sku": "shirt", "options": [{"name": "color", "values": ["red"]}]},
    )
    assert resp.status_code == 400
    assert resp.get_json()["message"] == "product with sku 'shirt_red' already exists"
    assert client.get("/v1/product_roots").get_json()["count"] == 1


def test_option_without_values_keeps_root_and_primary_image(client, png_base64):
    resp = client.post(
        "/v1/product",
        json={
            "name": "Shirt",
            "sku": "shirt",
            "images": [{"type": "base64", "data": png_base64}],
            "options": [{"name": "size", "values": []}],
        },
    )
    assert resp.status_code == 201
    root = resp.get_json()
    assert root["products"] == []
    assert [(o["name"], o["values"]) for o in root["options"]] == [("size", [])]
    assert len(root["images"]) == 1
    assert root["primary_image_id"] == root["images"][0]["id"]
