from storefront.extensions import db
from storefront.models.base import ArchivableMixin, DimensionsMixin, isoformat, utcnow


class Product(ArchivableMixin, DimensionsMixin, db.Model):
    """A concrete sellable SKU."""

    __tablename__ = "products"

    id = db.Column(db.Integer, primary_key=True)
    product_root_id = db.Column(
        db.Integer,
        db.ForeignKey("product_roots.id"),
        nullable=False,
        index=True,
    )
    primary_image_id = db.Column(db.Integer, db.ForeignKey("product_images.id"))
    name = db.Column(db.String(255), nullable=False)
    subtitle = db.Column(db.String(255), nullable=False, default="")
    description = db.Column(db.Text, nullable=False, default="")
    option_summary = db.Column(db.Text, nullable=False, default="")
    sku = db.Column(db.String(255), nullable=False, index=True)
    upc = db.Column(db.String(50), nullable=False, default="")
    manufacturer = db.Column(db.String(255), nullable=False, default="")
    brand = db.Column(db.String(255), nullable=False, default="")
    quantity = db.Column(db.Integer, nullable=False, default=0)
    quantity_per_package = db.Column(db.Integer, nullable=False, default=1)
    taxable = db.Column(db.Boolean, nullable=False, default=False)
    price = db.Column(db.Numeric(12, 2, asdecimal=False), nullable=False, default=0)
    on_sale = db.Column(db.Boolean, nullable=False, default=False)
    sale_price = db.Column(db.Numeric(12, 2, asdecimal=False), nullable=False, default=0)
    cost = db.Column(db.Numeric(12, 2, asdecimal=False), nullable=False, default=0)
    available_on = db.Column(db.DateTime(timezone=True), default=utcnow, nullable=False)

    option_values = db.relationship(
        "ProductOptionValue",
        secondary="product_variant_bridge",
        primaryjoin="Product.id == ProductVariantBridge.product_id",
        secondaryjoin="and_(ProductOptionValue.id == ProductVariantBridge.product_option_value_id, "
        "ProductVariantBridge.archived_on.is_(None))",
        lazy="select",
        viewonly=True,
        order_by="ProductOptionValue.product_option_id",
    )

    __table_args__ = (
        db.Index(
            "uq_products_active_sku",
            "sku",
            unique=True,
            postgresql_where=db.text("archived_on IS NULL"),
            sqlite_where=db.text("archived_on IS NULL"),
        ),
    )

    # Columns copied from a creation body onto every generated variant
    TEMPLATE_FIELDS = (
        "name",
        "subtitle",
        "description",
        "upc",
        "manufacturer",
        "brand",
        "quantity",
        "quantity_per_package",
        "taxable",
        "price",
        "on_sale",
        "sale_price",
        "cost",
        "available_on",
    ) + DimensionsMixin.DIMENSION_FIELDS

    # Columns a PATCH body may change
    UPDATABLE_FIELDS = tuple(f for f in TEMPLATE_FIELDS if f != "available_on") + (
        "sku",
        "option_summary",
        "available_on",
        "primary_image_id",
    )

    def to_dict(self, applicable_option_values=None):
        data = {
            "id": self.id,
            "product_root_id": self.product_root_id,
            "primary_image_id": self.primary_image_id,
            "name": self.name,
            "subtitle": self.subtitle,
            "description": self.description,
            "option_summary": self.option_summary,
            "sku": self.sku,
            "upc": self.upc,
            "manufacturer": self.manufacturer,
            "brand": self.brand,
            "quantity": self.quantity,
            "quantity_per_package": self.quantity_per_package,
            "taxable": self.taxable,
            "price": self.price,
            "on_sale": self.on_sale,
            "sale_price": self.sale_price,
            "cost": self.cost,
            "available_on": isoformat(self.available_on),
            **self.dimensions_dict(),
            **self.housekeeping_dict(),
        }
        values = applicable_option_values
        if values is None and self.id is not None:
            values = self.option_values
        if values:
            data["applicable_options"] = [v.to_dict() for v in values]
        return data

    def __repr__(self):
        return f"<Product {self.sku}>"
