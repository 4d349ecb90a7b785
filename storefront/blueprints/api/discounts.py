from flask import request

from storefront.blueprints.api import api_bp, list_args, list_response
from storefront.schemas import DiscountCreationInput, DiscountUpdateInput, parse_body
from storefront.services import discount_service


@api_bp.route("/discounts")
def list_discounts():
    return list_response(discount_service.list_discounts(**list_args()), lambda d: d.to_dict())


@api_bp.route("/discount/<int:discount_id>")
def get_discount(discount_id):
    return discount_service.get_discount(discount_id).to_dict()


@api_bp.route("/discount", methods=["POST"])
def create_discount():
    data = parse_body(DiscountCreationInput, request.get_json(silent=True))
    return discount_service.create_discount(data).to_dict(), 201


@api_bp.route("/discount/<int:discount_id>", methods=["PATCH"])
def update_discount(discount_id):
    data = parse_body(DiscountUpdateInput, request.get_json(silent=True))
    return discount_service.update_discount(discount_id, data).to_dict()


@api_bp.route("/discount/<int:discount_id>", methods=["DELETE"])
def delete_discount(discount_id):
    return discount_service.archive_discount(discount_id).to_dict()
