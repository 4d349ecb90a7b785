"""RQ worker job: deliver a webhook payload and record the outcome."""
import json
import logging
from xml.etree import ElementTree

import httpx
from flask import current_app, has_app_context

from storefront import create_app
from storefront.extensions import db
from storefront.models.webhook import Webhook, WebhookExecutionLog

logger = logging.getLogger(__name__)

_worker_app = None


def _get_app():
    """Return an app instance for worker execution.

    Reuse the current app when already inside an app context (tests/CLI),
    otherwise lazily create the worker app once.
    """
    global _worker_app
    if has_app_context():
        return current_app._get_current_object()
    if _worker_app is None:
        _worker_app = create_app()
    return _worker_app


def _xml_element(tag, value):
    element = ElementTree.Element(tag)
    if isinstance(value, dict):
        for key, child in value.items():
            element.append(_xml_element(key, child))
    elif isinstance(value, list):
        for child in value:
            element.append(_xml_element("item", child))
    elif value is not None:
        element.text = str(value).lower() if isinstance(value, bool) else str(value)
    return element


def serialize_payload(payload, content_type):
    if content_type.lower() == "application/xml":
        return ElementTree.tostring(_xml_element("payload", payload), encoding="utf-8")
    return json.dumps(payload).encode("utf-8")


def deliver_webhook(webhook_id, payload):
    """POST ``payload`` to the webhook's URL.

    Every attempt that reaches the HTTP layer is recorded as a
    WebhookExecutionLog; transport failures record status 0. Nothing is
    retried.
    """
    app = _get_app()
    with app.app_context():
        webhook = db.session.get(Webhook, webhook_id)
        if not webhook or webhook.archived_on is not None:
            logger.info("Webhook %d is gone, skipping delivery", webhook_id)
            return None

        body = serialize_payload(payload, webhook.content_type)
        status_code = 0
        try:
            resp = httpx.post(
                webhook.url,
                content=body,
                headers={"Content-Type": webhook.content_type},
                timeout=current_app.config["WEBHOOK_TIMEOUT"],
            )
            status_code = resp.status_code
        except httpx.HTTPError:
            logger.warning("error encountered executing webhook %d", webhook_id, exc_info=True)

        execution = WebhookExecutionLog(
            webhook_id=webhook.id,
            status_code=status_code,
            succeeded=200 <= status_code <= 300,
        )
        db.session.add(execution)
        try:
            db.session.commit()
        except Exception:
            db.session.rollback()
            logger.exception("error encountered logging webhook execution for %d", webhook_id)
            return None

        logger.info(
            "Webhook %d delivered to %s [%d]", webhook_id, webhook.url, status_code
        )
        return execution.id
