import logging
from dataclasses import dataclass

from storefront import extensions as ext
from storefront.errors import ConflictError, NotFoundError, StorefrontError
from storefront.extensions import db
from storefront.models.base import utcnow
from storefront.models.image import ProductImage
from storefront.models.option import ProductVariantBridge
from storefront.models.product import Product
from storefront.models.product_root import ProductRoot
from storefront.services import active_filter, atomic, image_service, paginate, webhook_service
from storefront.services.option_service import create_option_with_values
from storefront.services.product_root_service import serialize_root_with_children
from storefront.services.variants import build_products_from_options, new_product_from_template

logger = logging.getLogger(__name__)


@dataclass
class DeclaredOption:
    """An option as persisted this request, with its values in declaration order."""

    id: int
    name: str
    values: list


def product_with_sku_exists(sku):
    return Product.active().filter_by(sku=sku).first() is not None


def root_with_sku_prefix_exists(sku_prefix):
    return ProductRoot.active().filter_by(sku_prefix=sku_prefix).first() is not None


def get_product_by_sku(sku):
    product = Product.active().filter_by(sku=sku).first()
    if not product:
        raise NotFoundError("product", sku)
    return product


def list_products(page=1, limit=None, include_archived=False):
    query = active_filter(Product.query, Product, include_archived).order_by(Product.id)
    return paginate(query, page, limit)


ROOT_FIELDS = {
    "name",
    "subtitle",
    "description",
    "manufacturer",
    "brand",
    "taxable",
    "cost",
    "quantity_per_package",
    "available_on",
    "product_weight",
    "product_height",
    "product_width",
    "product_length",
    "package_weight",
    "package_height",
    "package_width",
    "package_length",
}


def new_root_from_template(template, sku_prefix):
    return ProductRoot(
        sku_prefix=sku_prefix,
        **{k: v for k, v in template.items() if k in ROOT_FIELDS},
    )


def store_product_images(root, image_inputs, sku, stored_indexes):
    """Decode, thumbnail, store and record each distinct image.

    Duplicate inputs (same data) are stored once. Each index written to
    the image storer is appended to ``stored_indexes``. Returns the created
    rows and the ID of the first image flagged primary, if any.
    """
    seen = set()
    to_create = []
    for image_input in image_inputs:
        if image_input.data in seen:
            continue
        seen.add(image_input.data)
        to_create.append(image_input)

    created = []
    primary_image_id = None
    for index, image_input in enumerate(to_create):
        img = image_service.image_from_input(image_input, index)
        thumbnails = ext.image_storer.create_thumbnails(img)
        stored_indexes.append(index)
        locations = ext.image_storer.store_images(thumbnails, sku, index)

        image = ProductImage(
            product_root_id=root.id,
            thumbnail_url=locations.thumbnail,
            main_url=locations.main,
            original_url=locations.original,
            source_url=image_input.data if image_input.type == "url" else "",
        )
        db.session.add(image)
        db.session.flush()  # get image.id

        if image_input.is_primary and primary_image_id is None:
            primary_image_id = image.id
        created.append(image)
    return created, primary_image_id


def save_product(product, product_root_id):
    product.product_root_id = product_root_id
    db.session.add(product)
    db.session.flush()  # get product.id
    return product


def create_variant_bridges(product_id, option_value_ids):
    for option_value_id in option_value_ids:
        db.session.add(
            ProductVariantBridge(product_id=product_id, product_option_value_id=option_value_id)
        )
    db.session.flush()


def persist_variants(root, products):
    """Insert each generated product and its option-value bridge rows.

    Runs inside the caller's transaction; the first failure propagates
    and takes everything else in the transaction down with it.
    """
    for product in products:
        save_product(product, root.id)
        create_variant_bridges(product.id, [v.id for v in product.applicable_option_values])
    return products


def assign_primary_image(root, products, images):
    if not images:
        return
    if root.primary_image_id is None:
        root.primary_image_id = images[0].id
    if products:
        products[0].primary_image_id = root.primary_image_id
    db.session.flush()


def ensure_skus_available(products):
    for product in products:
        if product_with_sku_exists(product.sku):
            raise ConflictError(f"product with sku '{product.sku}' already exists")


def discard_stored_images(sku, stored_indexes):
    for index in stored_indexes:
        ext.image_storer.discard_images(sku, index)


def create_product(data):
    """Create a product root and every product its options describe.

    ``data`` is a validated ProductCreationInput. The root, its images,
    options, values, products and variant bridges are written in a single
    transaction; webhooks fire only after it commits.
    """
    if root_with_sku_prefix_exists(data.sku) or product_with_sku_exists(data.sku):
        raise ConflictError(f"product with sku '{data.sku}' already exists")

    template = data.template()
    if template.get("available_on") is None:
        template["available_on"] = utcnow()

    stored_indexes = []
    try:
        with atomic(
            "insert product in database",
            conflict_message=f"product with sku '{data.sku}' already exists",
        ):
            root = new_root_from_template(template, data.sku)
            db.session.add(root)
            db.session.flush()  # get root.id

            options = []
            for option_input in data.options:
                option, values = create_option_with_values(
                    root.id, option_input.name, option_input.values
                )
                options.append(DeclaredOption(id=option.id, name=option.name, values=values))

            if options:
                products = build_products_from_options(template, data.sku, options)
            else:
                product = new_product_from_template(template)
                product.sku = data.sku
                product.option_summary = ""
                product.applicable_option_values = []
                products = [product]
            ensure_skus_available(products)

            images, root.primary_image_id = store_product_images(
                root, data.images, data.sku, stored_indexes
            )
            persist_variants(root, products)
            assign_primary_image(root, products, images)
            root_id = root.id
    except StorefrontError:
        discard_stored_images(data.sku, stored_indexes)
        raise

    logger.info("Created product root %s with %d products", data.sku, len(products))

    root = db.session.get(ProductRoot, root_id)
    payload = serialize_root_with_children(root)
    webhook_service.dispatch(webhook_service.PRODUCT_CREATED, payload)
    return payload


def update_product(sku, data):
    product = get_product_by_sku(sku)
    changes = {
        k: v
        for k, v in data.changes().items()
        if v is not None and k in Product.UPDATABLE_FIELDS
    }

    new_sku = changes.get("sku")
    if new_sku and new_sku != product.sku and product_with_sku_exists(new_sku):
        raise ConflictError(f"product with sku '{new_sku}' already exists")

    with atomic(
        "update product in database",
        conflict_message=f"product with sku '{new_sku or sku}' already exists",
    ):
        for field, value in changes.items():
            setattr(product, field, value)
        product.updated_on = utcnow()

    payload = product.to_dict()
    webhook_service.dispatch(webhook_service.PRODUCT_UPDATED, payload)
    return payload


def archive_product(sku):
    product = get_product_by_sku(sku)
    with atomic("archive product in database"):
        archived_on = utcnow()
        ProductVariantBridge.query.filter(
            ProductVariantBridge.product_id == product.id,
            ProductVariantBridge.archived_on.is_(None),
        ).update({"archived_on": archived_on}, synchronize_session=False)
        product.archive(archived_on)

    payload = product.to_dict()
    webhook_service.dispatch(webhook_service.PRODUCT_ARCHIVED, payload)
    return payload
