"""Product roots and the products generated from them."""
from flask import request

from storefront.blueprints.api import api_bp, list_args, list_response
from storefront.schemas import ProductCreationInput, ProductUpdateInput, parse_body
from storefront.services import product_root_service, product_service


@api_bp.route("/product_roots")
def list_product_roots():
    return list_response(product_root_service.list_product_roots(**list_args()))


@api_bp.route("/product_root/<int:product_root_id>")
def get_product_root(product_root_id):
    root = product_root_service.get_product_root(product_root_id)
    return product_root_service.serialize_root_with_children(root)


@api_bp.route("/product_root/<int:product_root_id>", methods=["DELETE"])
def delete_product_root(product_root_id):
    return product_root_service.archive_product_root(product_root_id)


@api_bp.route("/products")
def list_products():
    return list_response(product_service.list_products(**list_args()), lambda p: p.to_dict())


# HEAD is answered by this view too: 200 when the sku exists, 404 otherwise
@api_bp.route("/product/<sku>")
def get_product(sku):
    return product_service.get_product_by_sku(sku).to_dict()


@api_bp.route("/product", methods=["POST"])
def create_product():
    data = parse_body(ProductCreationInput, request.get_json(silent=True))
    return product_service.create_product(data), 201


@api_bp.route("/product/<sku>", methods=["PATCH"])
def update_product(sku):
    data = parse_body(ProductUpdateInput, request.get_json(silent=True))
    return product_service.update_product(sku, data)


@api_bp.route("/product/<sku>", methods=["DELETE"])
def delete_product(sku):
    return product_service.archive_product(sku)
