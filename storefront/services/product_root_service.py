from storefront.errors import NotFoundError
from storefront.extensions import db
from storefront.models.base import utcnow
from storefront.models.image import ProductImage
from storefront.models.option import ProductOption, ProductOptionValue, ProductVariantBridge
from storefront.models.product import Product
from storefront.models.product_root import ProductRoot
from storefront.services import active_filter, atomic, paginate


def get_product_root(product_root_id):
    root = ProductRoot.active().filter_by(id=product_root_id).first()
    if not root:
        raise NotFoundError("product root", product_root_id)
    return root


def products_for_root(product_root_id):
    return Product.active().filter_by(product_root_id=product_root_id).order_by(Product.id).all()


def serialize_root_with_children(root):
    """Root plus its active products, options (with values) and images."""
    options = (
        ProductOption.active().filter_by(product_root_id=root.id).order_by(ProductOption.id).all()
    )
    images = (
        ProductImage.active().filter_by(product_root_id=root.id).order_by(ProductImage.id).all()
    )
    return root.to_dict(products=products_for_root(root.id), options=options, images=images)


def list_product_roots(page=1, limit=None, include_archived=False):
    query = active_filter(ProductRoot.query, ProductRoot, include_archived).order_by(ProductRoot.id)
    result = paginate(query, page, limit)
    result["items"] = [
        root.to_dict(products=products_for_root(root.id)) for root in result["items"]
    ]
    return result


def archive_product_root(product_root_id):
    """Archive a root and everything generated from it, all or nothing."""
    root = get_product_root(product_root_id)

    product_ids = db.select(Product.id).where(Product.product_root_id == root.id)
    option_ids = db.select(ProductOption.id).where(ProductOption.product_root_id == root.id)

    with atomic("archive product root in database"):
        archived_on = utcnow()
        stamp = {"archived_on": archived_on}

        ProductVariantBridge.query.filter(
            ProductVariantBridge.product_id.in_(product_ids),
            ProductVariantBridge.archived_on.is_(None),
        ).update(stamp, synchronize_session=False)
        ProductOptionValue.query.filter(
            ProductOptionValue.product_option_id.in_(option_ids),
            ProductOptionValue.archived_on.is_(None),
        ).update(stamp, synchronize_session=False)
        ProductOption.query.filter(
            ProductOption.product_root_id == root.id,
            ProductOption.archived_on.is_(None),
        ).update(stamp, synchronize_session=False)
        Product.query.filter(
            Product.product_root_id == root.id,
            Product.archived_on.is_(None),
        ).update(stamp, synchronize_session=False)
        root.archive(archived_on)

    return root.to_dict()
