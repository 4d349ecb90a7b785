from storefront.extensions import db
from storefront.models.base import ArchivableMixin, DimensionsMixin, isoformat, utcnow


class ProductRoot(ArchivableMixin, DimensionsMixin, db.Model):
    """The abstract parent a family of sellable products is generated from."""

    __tablename__ = "product_roots"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    subtitle = db.Column(db.String(255), nullable=False, default="")
    description = db.Column(db.Text, nullable=False, default="")
    sku_prefix = db.Column(db.String(50), nullable=False, index=True)
    manufacturer = db.Column(db.String(255), nullable=False, default="")
    brand = db.Column(db.String(255), nullable=False, default="")
    taxable = db.Column(db.Boolean, nullable=False, default=False)
    cost = db.Column(db.Numeric(12, 2, asdecimal=False), nullable=False, default=0)
    quantity_per_package = db.Column(db.Integer, nullable=False, default=1)
    primary_image_id = db.Column(db.Integer)
    available_on = db.Column(db.DateTime(timezone=True), default=utcnow, nullable=False)

    # Relationships
    products = db.relationship(
        "Product", backref="product_root", lazy="select", order_by="Product.id"
    )
    options = db.relationship(
        "ProductOption",
        backref="product_root",
        lazy="select",
        order_by="ProductOption.id",
    )
    images = db.relationship(
        "ProductImage",
        backref="product_root",
        lazy="select",
        order_by="ProductImage.id",
    )

    __table_args__ = (
        db.Index(
            "uq_product_roots_active_sku_prefix",
            "sku_prefix",
            unique=True,
            postgresql_where=db.text("archived_on IS NULL"),
            sqlite_where=db.text("archived_on IS NULL"),
        ),
    )

    def to_dict(self, products=None, options=None, images=None):
        data = {
            "id": self.id,
            "name": self.name,
            "subtitle": self.subtitle,
            "description": self.description,
            "sku_prefix": self.sku_prefix,
            "manufacturer": self.manufacturer,
            "brand": self.brand,
            "taxable": self.taxable,
            "cost": self.cost,
            "quantity_per_package": self.quantity_per_package,
            "primary_image_id": self.primary_image_id,
            "available_on": isoformat(self.available_on),
            **self.dimensions_dict(),
            **self.housekeeping_dict(),
        }
        if products is not None:
            data["products"] = [p.to_dict() for p in products]
        if options is not None:
            data["options"] = [o.to_dict() for o in options]
        if images is not None:
            data["images"] = [i.to_dict() for i in images]
        return data

    def __repr__(self):
        return f"<ProductRoot {self.sku_prefix}: {self.name}>"
