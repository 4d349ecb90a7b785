from storefront.extensions import db
from storefront.models.base import ArchivableMixin


class ProductOption(ArchivableMixin, db.Model):
    """A named axis of variation ("color", "size") on a product root."""

    __tablename__ = "product_options"

    id = db.Column(db.Integer, primary_key=True)
    product_root_id = db.Column(
        db.Integer,
        db.ForeignKey("product_roots.id"),
        nullable=False,
        index=True,
    )
    name = db.Column(db.String(50), nullable=False)

    __table_args__ = (
        db.Index(
            "uq_product_options_active_name",
            "product_root_id",
            "name",
            unique=True,
            postgresql_where=db.text("archived_on IS NULL"),
            sqlite_where=db.text("archived_on IS NULL"),
        ),
    )

    values = db.relationship(
        "ProductOptionValue",
        lazy="select",
        order_by="ProductOptionValue.id",
        primaryjoin="and_(ProductOption.id == ProductOptionValue.product_option_id, "
        "ProductOptionValue.archived_on.is_(None))",
        viewonly=True,
    )

    def to_dict(self, values=None):
        data = {
            "id": self.id,
            "product_root_id": self.product_root_id,
            "name": self.name,
            **self.housekeeping_dict(),
        }
        values = self.values if values is None else values
        data["values"] = [v.to_dict() for v in values]
        return data

    def __repr__(self):
        return f"<ProductOption {self.name}>"


class ProductOptionValue(ArchivableMixin, db.Model):
    __tablename__ = "product_option_values"

    id = db.Column(db.Integer, primary_key=True)
    product_option_id = db.Column(
        db.Integer,
        db.ForeignKey("product_options.id"),
        nullable=False,
        index=True,
    )
    value = db.Column(db.String(50), nullable=False)

    option = db.relationship("ProductOption", lazy="select")

    __table_args__ = (
        db.Index(
            "uq_product_option_values_active_value",
            "product_option_id",
            "value",
            unique=True,
            postgresql_where=db.text("archived_on IS NULL"),
            sqlite_where=db.text("archived_on IS NULL"),
        ),
    )

    def to_dict(self):
        return {
            "id": self.id,
            "product_option_id": self.product_option_id,
            "value": self.value,
            **self.housekeeping_dict(),
        }

    def __repr__(self):
        return f"<ProductOptionValue {self.value}>"


class ProductVariantBridge(ArchivableMixin, db.Model):
    """Which option value produced which product."""

    __tablename__ = "product_variant_bridge"

    id = db.Column(db.Integer, primary_key=True)
    product_id = db.Column(
        db.Integer,
        db.ForeignKey("products.id"),
        nullable=False,
        index=True,
    )
    product_option_value_id = db.Column(
        db.Integer,
        db.ForeignKey("product_option_values.id"),
        nullable=False,
        index=True,
    )

    def __repr__(self):
        return f"<ProductVariantBridge {self.product_id} -> {self.product_option_value_id}>"
