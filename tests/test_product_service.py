"""Tests for transactional product creation."""
from unittest.mock import patch

import pytest

from storefront.errors import ConflictError, InternalError
from storefront.models import (
    Product,
    ProductImage,
    ProductOption,
    ProductOptionValue,
    ProductRoot,
    ProductVariantBridge,
)
from storefront.schemas import ProductCreationInput
from storefront.services import product_root_service, product_service


def shirt(**overrides):
    body = {
        "name": "Shirt",
        "sku": "shirt",
        "options": [
            {"name": "color", "values": ["red", "blue"]},
            {"name": "size", "values": ["S", "M"]},
        ],
    }
    body.update(overrides)
    return ProductCreationInput.model_validate(body)


def table_counts():
    return {
        model.__tablename__: model.query.count()
        for model in (
            ProductRoot,
            Product,
            ProductOption,
            ProductOptionValue,
            ProductVariantBridge,
            ProductImage,
        )
    }


def test_create_product_writes_every_variant(app, db):
    root = product_service.create_product(shirt())

    assert root["sku_prefix"] == "shirt"
    assert [p["sku"] for p in root["products"]] == [
        "shirt_red_s",
        "shirt_red_m",
        "shirt_blue_s",
        "shirt_blue_m",
    ]
    assert [o["name"] for o in root["options"]] == ["color", "size"]
    assert [v["value"] for v in root["options"][0]["values"]] == ["red", "blue"]
    assert ProductVariantBridge.query.count() == 8

    red_m = Product.query.filter_by(sku="shirt_red_m").one()
    assert [v.value for v in red_m.option_values] == ["red", "M"]
    assert red_m.option_summary == "color: red, size: M"


def test_create_product_without_options_makes_one_product(app, db):
    root = product_service.create_product(shirt(sku="mug", options=[]))

    assert len(root["products"]) == 1
    product = root["products"][0]
    assert product["sku"] == "mug"
    assert product["option_summary"] == ""
    assert "applicable_options" not in product


def test_failure_midway_rolls_everything_back(app, db):
    real_save = product_service.save_product
    calls = []

    def failing_save(product, product_root_id):
        calls.append(product.sku)
        if len(calls) == 3:
            raise RuntimeError("disk full")
        return real_save(product, product_root_id)

    with patch("storefront.services.product_service.save_product", side_effect=failing_save):
        with pytest.raises(InternalError) as exc_info:
            product_service.create_product(shirt())

    assert exc_info.value.message == "Unexpected internal error occurred"
    assert len(calls) == 3
    assert all(count == 0 for count in table_counts().values())


def test_duplicate_sku_prefix_is_rejected(app, db):
    product_service.create_product(shirt())
    before = table_counts()

    with pytest.raises(ConflictError) as exc_info:
        product_service.create_product(shirt(name="Another shirt"))

    assert "already exists" in exc_info.value.message
    assert table_counts() == before


def test_sku_prefix_can_be_reused_after_archive(app, db):
    root = product_service.create_product(shirt(options=[]))
    product_service.archive_product("shirt")
    product_root_service.archive_product_root(root["id"])
    again = product_service.create_product(shirt(options=[]))
    assert again["id"] != root["id"]


def test_created_webhooks_fire_after_commit(app, db):
    with patch("storefront.services.product_service.webhook_service") as mock_webhooks:
        root = product_service.create_product(shirt())
    event, payload = mock_webhooks.dispatch.call_args.args
    assert event == mock_webhooks.PRODUCT_CREATED
    assert payload["id"] == root["id"]


def test_no_webhooks_when_creation_fails(app, db):
    with patch("storefront.services.product_service.webhook_service") as mock_webhooks, patch(
        "storefront.services.product_service.persist_variants",
        side_effect=RuntimeError("boom"),
    ):
        with pytest.raises(InternalError):
            product_service.create_product(shirt())
    mock_webhooks.dispatch.assert_not_called()


def test_primary_image_is_set_on_root_and_first_product(app, db, png_base64):
    root = product_service.create_product(
        shirt(images=[{"type": "base64", "data": png_base64, "is_primary": True}])
    )

    assert len(root["images"]) == 1
    image_id = root["images"][0]["id"]
    assert root["primary_image_id"] == image_id
    assert root["products"][0]["primary_image_id"] == image_id
    assert root["products"][1]["primary_image_id"] is None


def test_option_without_values_still_sets_primary_image(app, db, png_base64):
    root = product_service.create_product(
        shirt(
            images=[{"type": "base64", "data": png_base64}],
            options=[{"name": "size", "values": []}],
        )
    )

    assert root["products"] == []
    assert root["options"][0]["values"] == []
    assert root["primary_image_id"] == root["images"][0]["id"]
    assert ProductOption.query.count() == 1


def test_generated_sku_already_taken(app, db):
    product_service.create_product(shirt(sku="shirt_red", options=[]))

    with pytest.raises(ConflictError) as exc_info:
        product_service.create_product(shirt(options=[{"name": "color", "values": ["red"]}]))

    assert exc_info.value.message == "product with sku 'shirt_red' already exists"
    assert ProductRoot.query.count() == 1
