import logging
from dataclasses import dataclass

from storefront import extensions as ext
from storefront.errors import NotFoundError
from storefront.extensions import db
from storefront.models.base import utcnow
from storefront.models.webhook import Webhook, WebhookExecutionLog
from storefront.services import active_filter, atomic, paginate

logger = logging.getLogger(__name__)

PRODUCT_CREATED = "product_created"
PRODUCT_UPDATED = "product_updated"
PRODUCT_ARCHIVED = "product_archived"


@dataclass
class DispatchResult:
    enqueued: int = 0
    dropped: int = 0


def get_webhook(webhook_id):
    webhook = Webhook.active().filter_by(id=webhook_id).first()
    if not webhook:
        raise NotFoundError("webhook", webhook_id)
    return webhook


def list_webhooks(page=1, limit=None, include_archived=False, event_type=None):
    query = active_filter(Webhook.query, Webhook, include_archived)
    if event_type:
        query = query.filter_by(event_type=event_type)
    return paginate(query.order_by(Webhook.id), page, limit)


def create_webhook(data):
    with atomic("insert webhook into database"):
        webhook = Webhook(**data.model_dump())
        db.session.add(webhook)
    return webhook


def update_webhook(webhook_id, data):
    webhook = get_webhook(webhook_id)
    with atomic("update webhook in database"):
        for field, value in data.changes().items():
            if value is not None:
                setattr(webhook, field, value)
        webhook.updated_on = utcnow()
    return webhook


def archive_webhook(webhook_id):
    webhook = get_webhook(webhook_id)
    with atomic("archive webhook in database"):
        webhook.archive()
    return webhook


def list_executions(webhook_id, page=1, limit=None):
    get_webhook(webhook_id)
    query = WebhookExecutionLog.query.filter_by(webhook_id=webhook_id).order_by(
        WebhookExecutionLog.executed_on.desc(), WebhookExecutionLog.id.desc()
    )
    return paginate(query, page, limit)


def dispatch(event_type, payload):
    """Queue a delivery job for every active webhook listening for ``event_type``.

    Called after the originating transaction has committed. Nothing here
    raises: lookup or queue failures are logged and reflected in the
    returned counts.
    """
    result = DispatchResult()
    try:
        webhooks = Webhook.active().filter_by(event_type=event_type).order_by(Webhook.id).all()
    except Exception:
        logger.exception("Failed to load webhooks for %s", event_type)
        return result

    from storefront.workers.webhooks import deliver_webhook

    for webhook in webhooks:
        try:
            job = ext.task_queue.enqueue(deliver_webhook, webhook.id, payload)
        except Exception:
            logger.exception("Failed to enqueue webhook %d for %s", webhook.id, event_type)
            job = None
        if job is None:
            result.dropped += 1
        else:
            result.enqueued += 1

    if result.dropped:
        logger.warning(
            "%d of %d %s webhook deliveries were not queued",
            result.dropped,
            len(webhooks),
            event_type,
        )
    return result
