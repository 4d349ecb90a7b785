from storefront.models.product_root import ProductRoot
from storefront.models.product import Product
from storefront.models.option import ProductOption, ProductOptionValue, ProductVariantBridge
from storefront.models.image import ProductImage
from storefront.models.discount import Discount
from storefront.models.webhook import Webhook, WebhookExecutionLog
from storefront.models.user import User

__all__ = [
    "ProductRoot",
    "Product",
    "ProductOption",
    "ProductOptionValue",
    "ProductVariantBridge",
    "ProductImage",
    "Discount",
    "Webhook",
    "WebhookExecutionLog",
    "User",
]
