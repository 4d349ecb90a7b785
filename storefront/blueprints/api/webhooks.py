"""Webhook registrations and their delivery history."""
from flask import request

from storefront.blueprints.api import api_bp, list_args, list_response
from storefront.errors import ValidationError
from storefront.models.webhook import Webhook
from storefront.schemas import WebhookCreationInput, WebhookUpdateInput, parse_body
from storefront.services import webhook_service


@api_bp.route("/webhooks")
def list_webhooks():
    return list_response(webhook_service.list_webhooks(**list_args()), lambda w: w.to_dict())


@api_bp.route("/webhooks/<event_type>")
def list_webhooks_for_event(event_type):
    if event_type not in Webhook.EVENT_TYPES:
        raise ValidationError(f"unknown webhook event type '{event_type}'")
    result = webhook_service.list_webhooks(event_type=event_type, **list_args())
    return list_response(result, lambda w: w.to_dict())


@api_bp.route("/webhook/<int:webhook_id>")
def get_webhook(webhook_id):
    return webhook_service.get_webhook(webhook_id).to_dict()


@api_bp.route("/webhook", methods=["POST"])
def create_webhook():
    data = parse_body(WebhookCreationInput, request.get_json(silent=True))
    return webhook_service.create_webhook(data).to_dict(), 201


@api_bp.route("/webhook/<int:webhook_id>", methods=["PATCH"])
def update_webhook(webhook_id):
    data = parse_body(WebhookUpdateInput, request.get_json(silent=True))
    return webhook_service.update_webhook(webhook_id, data).to_dict()


@api_bp.route("/webhook/<int:webhook_id>", methods=["DELETE"])
def delete_webhook(webhook_id):
    return webhook_service.archive_webhook(webhook_id).to_dict()


@api_bp.route("/webhook/<int:webhook_id>/executions")
def list_webhook_executions(webhook_id):
    args = list_args()
    result = webhook_service.list_executions(webhook_id, page=args["page"], limit=args["limit"])
    return list_response(result, lambda e: e.to_dict())
