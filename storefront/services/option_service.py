from storefront.errors import ConflictError, NotFoundError
from storefront.extensions import db
from storefront.models.base import utcnow
from storefront.models.option import ProductOption, ProductOptionValue
from storefront.models.product_root import ProductRoot
from storefront.services import active_filter, atomic, paginate


def option_name_exists(product_root_id, name):
    return (
        ProductOption.active()
        .filter_by(product_root_id=product_root_id, name=name)
        .first()
        is not None
    )


def option_value_exists(option_id, value):
    return (
        ProductOptionValue.active()
        .filter_by(product_option_id=option_id, value=value)
        .first()
        is not None
    )


def get_option(option_id):
    option = ProductOption.active().filter_by(id=option_id).first()
    if not option:
        raise NotFoundError("product option", option_id)
    return option


def get_option_value(value_id):
    value = ProductOptionValue.active().filter_by(id=value_id).first()
    if not value:
        raise NotFoundError("product option value", value_id)
    return value


def create_option_with_values(product_root_id, name, values):
    """Insert an option and its values in the current transaction.

    Returns ``(option, [values...])`` with values in the order given.
    """
    option = ProductOption(product_root_id=product_root_id, name=name)
    db.session.add(option)
    db.session.flush()  # get option.id

    created = []
    for value in values:
        option_value = ProductOptionValue(product_option_id=option.id, value=value)
        db.session.add(option_value)
        created.append(option_value)
    db.session.flush()
    return option, created


def list_options_for_root(product_root_id, page=1, limit=None, include_archived=False):
    query = active_filter(
        ProductOption.query.filter_by(product_root_id=product_root_id),
        ProductOption,
        include_archived,
    ).order_by(ProductOption.id)
    return paginate(query, page, limit)


def create_option(product_root_id, data):
    """Add an option (and its values) to an existing product root.

    Existing products are not regenerated.
    """
    if not ProductRoot.active().filter_by(id=product_root_id).first():
        raise NotFoundError("product root", product_root_id)
    if option_name_exists(product_root_id, data.name):
        raise ConflictError(f"product option with the name '{data.name}' already exists")

    with atomic("create product option in the database"):
        option, _ = create_option_with_values(product_root_id, data.name, data.values)
    return option


def update_option(option_id, data):
    option = get_option(option_id)
    if data.name != option.name and option_name_exists(option.product_root_id, data.name):
        raise ConflictError(f"product option with the name '{data.name}' already exists")

    with atomic("update product option in the database"):
        option.name = data.name
        option.updated_on = utcnow()
    return option


def archive_option(option_id):
    """Archive an option along with its values."""
    option = get_option(option_id)
    with atomic("archive product option"):
        archived_on = utcnow()
        ProductOptionValue.query.filter(
            ProductOptionValue.product_option_id == option.id,
            ProductOptionValue.archived_on.is_(None),
        ).update({"archived_on": archived_on}, synchronize_session=False)
        option.archive(archived_on)
    return option


def create_option_value(option_id, data):
    if not ProductOption.active().filter_by(id=option_id).first():
        raise NotFoundError("product option", option_id)
    if option_value_exists(option_id, data.value):
        raise ConflictError(
            f"product option value '{data.value}' already exists for option ID {option_id}"
        )

    with atomic("insert product option value in database"):
        option_value = ProductOptionValue(product_option_id=option_id, value=data.value)
        db.session.add(option_value)
    return option_value


def update_option_value(value_id, data):
    option_value = get_option_value(value_id)
    if data.value != option_value.value and option_value_exists(
        option_value.product_option_id, data.value
    ):
        raise ConflictError(
            f"product option value '{data.value}' already exists "
            f"for option ID {option_value.product_option_id}"
        )

    with atomic("update product option value in the database"):
        option_value.value = data.value
        option_value.updated_on = utcnow()
    return option_value


def archive_option_value(value_id):
    option_value = get_option_value(value_id)
    with atomic("archive product option value"):
        option_value.archive()
    return option_value
