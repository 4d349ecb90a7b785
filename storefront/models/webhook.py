from storefront.extensions import db
from storefront.models.base import ArchivableMixin, isoformat, utcnow


class Webhook(ArchivableMixin, db.Model):
    __tablename__ = "webhooks"

    id = db.Column(db.Integer, primary_key=True)
    url = db.Column(db.String(1024), nullable=False)
    event_type = db.Column(db.String(50), nullable=False, index=True)
    content_type = db.Column(db.String(50), nullable=False, default="application/json")

    EVENT_TYPES = {"product_created", "product_updated", "product_archived"}

    def to_dict(self):
        return {
            "id": self.id,
            "url": self.url,
            "event_type": self.event_type,
            "content_type": self.content_type,
            **self.housekeeping_dict(),
        }

    def __repr__(self):
        return f"<Webhook {self.event_type} -> {self.url}>"


class WebhookExecutionLog(db.Model):
    __tablename__ = "webhook_execution_logs"

    id = db.Column(db.Integer, primary_key=True)
    webhook_id = db.Column(
        db.Integer,
        db.ForeignKey("webhooks.id"),
        nullable=False,
        index=True,
    )
    status_code = db.Column(db.Integer, nullable=False, default=0)
    succeeded = db.Column(db.Boolean, nullable=False, default=False)
    executed_on = db.Column(db.DateTime(timezone=True), default=utcnow, nullable=False)

    def to_dict(self):
        return {
            "id": self.id,
            "webhook_id": self.webhook_id,
            "status_code": self.status_code,
            "succeeded": self.succeeded,
            "executed_on": isoformat(self.executed_on),
        }

    def __repr__(self):
        return f"<WebhookExecutionLog {self.webhook_id} [{self.status_code}]>"
