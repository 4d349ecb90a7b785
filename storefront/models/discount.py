from storefront.extensions import db
from storefront.models.base import ArchivableMixin, isoformat, utcnow


class Discount(ArchivableMixin, db.Model):
    """A temporary pricing change, optionally gated behind a code."""

    __tablename__ = "discounts"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    discount_type = db.Column(db.String(20), nullable=False)
    amount = db.Column(db.Numeric(12, 2, asdecimal=False), nullable=False, default=0)
    starts_on = db.Column(db.DateTime(timezone=True), default=utcnow, nullable=False)
    expires_on = db.Column(db.DateTime(timezone=True))
    requires_code = db.Column(db.Boolean, nullable=False, default=False)
    code = db.Column(db.String(100), nullable=False, default="")
    limited_use = db.Column(db.Boolean, nullable=False, default=False)
    number_of_uses = db.Column(db.Integer, nullable=False, default=0)
    login_required = db.Column(db.Boolean, nullable=False, default=False)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "discount_type": self.discount_type,
            "amount": self.amount,
            "starts_on": isoformat(self.starts_on),
            "expires_on": isoformat(self.expires_on),
            "requires_code": self.requires_code,
            "code": self.code,
            "limited_use": self.limited_use,
            "number_of_uses": self.number_of_uses,
            "login_required": self.login_required,
            **self.housekeeping_dict(),
        }

    def __repr__(self):
        return f"<Discount {self.name} ({self.discount_type} {self.amount})>"
