"""Shared columns and helpers for archivable rows."""
from datetime import datetime, timezone

from storefront.extensions import db


def utcnow():
    return datetime.now(timezone.utc)


def isoformat(value):
    return value.isoformat() if value else None


class ArchivableMixin:
    """created_on / updated_on / archived_on housekeeping columns.

    Rows are never deleted; archiving stamps ``archived_on`` and every
    "active" query filters on it being NULL.
    """

    created_on = db.Column(db.DateTime(timezone=True), default=utcnow, nullable=False)
    updated_on = db.Column(db.DateTime(timezone=True), onupdate=utcnow)
    archived_on = db.Column(db.DateTime(timezone=True), index=True)

    @classmethod
    def active(cls):
        return cls.query.filter(cls.archived_on.is_(None))

    @property
    def is_archived(self):
        return self.archived_on is not None

    def archive(self, when=None):
        self.archived_on = when or utcnow()
        return self.archived_on

    def housekeeping_dict(self):
        return {
            "created_on": isoformat(self.created_on),
            "updated_on": isoformat(self.updated_on),
            "archived_on": isoformat(self.archived_on),
        }


class DimensionsMixin:
    """Product and package measurements shared by roots and products."""

    product_weight = db.Column(db.Float, nullable=False, default=0)
    product_height = db.Column(db.Float, nullable=False, default=0)
    product_width = db.Column(db.Float, nullable=False, default=0)
    product_length = db.Column(db.Float, nullable=False, default=0)
    package_weight = db.Column(db.Float, nullable=False, default=0)
    package_height = db.Column(db.Float, nullable=False, default=0)
    package_width = db.Column(db.Float, nullable=False, default=0)
    package_length = db.Column(db.Float, nullable=False, default=0)

    DIMENSION_FIELDS = (
        "product_weight",
        "product_height",
        "product_width",
        "product_length",
        "package_weight",
        "package_height",
        "package_width",
        "package_length",
    )

    def dimensions_dict(self):
        return {name: getattr(self, name) for name in self.DIMENSION_FIELDS}
