"""Tests for product option and option value endpoints."""


def create_root(client, shirt_body):
    resp = client.post("/v1/product", json=shirt_body)
    assert resp.status_code == 201
    return resp.get_json()


def test_list_options(client, shirt_body):
    root = create_root(client, shirt_body)
    resp = client.get(f"/v1/product/{root['id']}/options")
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["count"] == 2
    assert [o["name"] for o in data["data"]] == ["color", "size"]
    assert [v["value"] for v in data["data"][1]["values"]] == ["S", "M"]


def test_create_option(client, shirt_body):
    root = create_root(client, shirt_body)
    resp = client.post(
        f"/v1/product/{root['id']}/options",
        json={"name": "material", "values": ["cotton", "linen"]},
    )
    assert resp.status_code == 201
    option = resp.get_json()
    assert option["name"] == "material"
    assert [v["value"] for v in option["values"]] == ["cotton", "linen"]

    # existing products are left alone
    assert client.get("/v1/products").get_json()["count"] == 4


def test_create_option_for_missing_root(client):
    resp = client.post("/v1/product/999/options", json={"name": "material", "values": []})
    assert resp.status_code == 404


def test_create_duplicate_option(client, shirt_body):
    root = create_root(client, shirt_body)
    resp = client.post(f"/v1/product/{root['id']}/options", json={"name": "color"})
    assert resp.status_code == 400
    assert "already exists" in resp.get_json()["message"]


def test_option_values_must_be_unique(client, shirt_body):
    root = create_root(client, shirt_body)
    resp = client.post(
        f"/v1/product/{root['id']}/options",
        json={"name": "material", "values": ["cotton", "cotton"]},
    )
    assert resp.status_code == 400


def test_rename_option(client, shirt_body):
    root = create_root(client, shirt_body)
    option_id = root["options"][0]["id"]

    resp = client.patch(f"/v1/product_options/{option_id}", json={"name": "colour"})
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["name"] == "colour"
    assert len(data["values"]) == 2

    resp = client.patch(f"/v1/product_options/{option_id}", json={"name": "size"})
    assert resp.status_code == 400


def test_archive_option_archives_values(client, shirt_body):
    root = create_root(client, shirt_body)
    option = root["options"][0]

    resp = client.delete(f"/v1/product_options/{option['id']}")
    assert resp.status_code == 200
    assert resp.get_json()["archived_on"] is not None

    value_id = option["values"][0]["id"]
    resp = client.patch(f"/v1/product_option_values/{value_id}", json={"value": "pink"})
    assert resp.status_code == 404

    listing = client.get(f"/v1/product/{root['id']}/options").get_json()
    assert [o["name"] for o in listing["data"]] == ["size"]


def test_option_value_lifecycle(client, shirt_body):
    root = create_root(client, shirt_body)
    option_id = root["options"][1]["id"]

    resp = client.post(f"/v1/product_options/{option_id}/value", json={"value": "L"})
    assert resp.status_code == 201
    value = resp.get_json()
    assert value["product_option_id"] == option_id

    resp = client.post(f"/v1/product_options/{option_id}/value", json={"value": "L"})
    assert resp.status_code == 400

    resp = client.patch(f"/v1/product_option_values/{value['id']}", json={"value": "XL"})
    assert resp.status_code == 200
    assert resp.get_json()["value"] == "XL"

    resp = client.delete(f"/v1/product_option_values/{value['id']}")
    assert resp.status_code == 200
    assert resp.get_json()["archived_on"] is not None

    # archived values free their name
    resp = client.post(f"/v1/product_options/{option_id}/value", json={"value": "XL"})
    assert resp.status_code == 201


def test_option_value_for_missing_option(client):
    resp = client.post("/v1/product_options/999/value", json={"value": "L"})
    assert resp.status_code == 404
    assert resp.get_json()["message"] == (
        "The product option you were looking for (id '999') does not exist"
    )


def test_option_value_must_be_restricted_string(client, shirt_body):
    root = create_root(client, shirt_body)
    option_id = root["options"][1]["id"]
    resp = client.post(f"/v1/product_options/{option_id}/value", json={"value": "X L"})
    assert resp.status_code == 400
