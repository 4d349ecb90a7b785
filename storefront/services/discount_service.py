from storefront.errors import NotFoundError, ValidationError
from storefront.extensions import db
from storefront.models.base import utcnow
from storefront.models.discount import Discount
from storefront.services import active_filter, atomic, paginate


def get_discount(discount_id):
    discount = Discount.active().filter_by(id=discount_id).first()
    if not discount:
        raise NotFoundError("discount", discount_id)
    return discount


def list_discounts(page=1, limit=None, include_archived=False):
    query = active_filter(Discount.query, Discount, include_archived).order_by(Discount.id)
    return paginate(query, page, limit)


def create_discount(data):
    fields = data.model_dump()
    if fields["starts_on"] is None:
        fields["starts_on"] = utcnow()

    with atomic("insert discount into database"):
        discount = Discount(**fields)
        db.session.add(discount)
    return discount


def update_discount(discount_id, data):
    discount = get_discount(discount_id)
    changes = {k: v for k, v in data.changes().items() if v is not None or k == "expires_on"}

    requires_code = changes.get("requires_code", discount.requires_code)
    code = changes.get("code", discount.code)
    if requires_code and not code:
        raise ValidationError("a code must be provided when requires_code is set")

    with atomic("update discount in database"):
        for field, value in changes.items():
            setattr(discount, field, value)
        discount.updated_on = utcnow()
    return discount


def archive_discount(discount_id):
    discount = get_discount(discount_id)
    with atomic("archive discount in database"):
        discount.archive()
    return discount
