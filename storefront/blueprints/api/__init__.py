from flask import Blueprint, request

api_bp = Blueprint("api", __name__)


def list_args():
    """``page``, ``limit`` and ``include_archived`` from the query string."""
    return {
        "page": request.args.get("page", 1, type=int),
        "limit": request.args.get("limit", None, type=int),
        "include_archived": request.args.get("include_archived", "false").lower() == "true",
    }


def list_response(result, serialize=None):
    items = result["items"]
    return {
        "count": result["count"],
        "limit": result["limit"],
        "page": result["page"],
        "data": [serialize(item) for item in items] if serialize else items,
    }


from storefront.blueprints.api import (  # noqa: F401, E402
    discounts,
    options,
    products,
    users,
    webhooks,
)
