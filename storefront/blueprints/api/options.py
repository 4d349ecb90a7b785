from flask import request

from storefront.blueprints.api import api_bp, list_args, list_response
from storefront.schemas import (
    ProductOptionCreationInput,
    ProductOptionUpdateInput,
    ProductOptionValueInput,
    parse_body,
)
from storefront.services import option_service, product_root_service


@api_bp.route("/product/<int:product_root_id>/options")
def list_options(product_root_id):
    product_root_service.get_product_root(product_root_id)
    result = option_service.list_options_for_root(product_root_id, **list_args())
    return list_response(result, lambda o: o.to_dict())


@api_bp.route("/product/<int:product_root_id>/options", methods=["POST"])
def create_option(product_root_id):
    data = parse_body(ProductOptionCreationInput, request.get_json(silent=True))
    return option_service.create_option(product_root_id, data).to_dict(), 201


@api_bp.route("/product_options/<int:option_id>", methods=["PATCH"])
def update_option(option_id):
    data = parse_body(ProductOptionUpdateInput, request.get_json(silent=True))
    return option_service.update_option(option_id, data).to_dict()


@api_bp.route("/product_options/<int:option_id>", methods=["DELETE"])
def delete_option(option_id):
    return option_service.archive_option(option_id).to_dict()


@api_bp.route("/product_options/<int:option_id>/value", methods=["POST"])
def create_option_value(option_id):
    data = parse_body(ProductOptionValueInput, request.get_json(silent=True))
    return option_service.create_option_value(option_id, data).to_dict(), 201


@api_bp.route("/product_option_values/<int:value_id>", methods=["PATCH"])
def update_option_value(value_id):
    data = parse_body(ProductOptionValueInput, request.get_json(silent=True))
    return option_service.update_option_value(value_id, data).to_dict()


@api_bp.route("/product_option_values/<int:value_id>", methods=["DELETE"])
def delete_option_value(value_id):
    return option_service.archive_option_value(value_id).to_dict()
