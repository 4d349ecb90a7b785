from flask import request

from storefront.blueprints.api import api_bp
from storefront.schemas import UserCreationInput, UserUpdateInput, parse_body
from storefront.services import user_service


@api_bp.route("/user", methods=["POST"])
def create_user():
    data = parse_body(UserCreationInput, request.get_json(silent=True))
    return user_service.create_user(data).to_dict(), 201


@api_bp.route("/user/<int:user_id>")
def get_user(user_id):
    return user_service.get_user(user_id).to_dict()


@api_bp.route("/user/<int:user_id>", methods=["PATCH"])
def update_user(user_id):
    data = parse_body(UserUpdateInput, request.get_json(silent=True))
    return user_service.update_user(user_id, data).to_dict()


@api_bp.route("/user/<int:user_id>", methods=["DELETE"])
def delete_user(user_id):
    return user_service.archive_user(user_id).to_dict()
