from storefront.extensions import db
from storefront.models.base import ArchivableMixin


class ProductImage(ArchivableMixin, db.Model):
    __tablename__ = "product_images"

    id = db.Column(db.Integer, primary_key=True)
    product_root_id = db.Column(
        db.Integer,
        db.ForeignKey("product_roots.id"),
        nullable=False,
        index=True,
    )
    thumbnail_url = db.Column(db.String(1024), nullable=False, default="")
    main_url = db.Column(db.String(1024), nullable=False, default="")
    original_url = db.Column(db.String(1024), nullable=False, default="")
    source_url = db.Column(db.String(1024), nullable=False, default="")

    def to_dict(self):
        return {
            "id": self.id,
            "product_root_id": self.product_root_id,
            "thumbnail_url": self.thumbnail_url,
            "main_url": self.main_url,
            "original_url": self.original_url,
            "source_url": self.source_url,
            **self.housekeeping_dict(),
        }

    def __repr__(self):
        return f"<ProductImage {self.id} of root {self.product_root_id}>"
