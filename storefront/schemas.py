"""Request body contracts for the JSON API."""
import re
from datetime import datetime
from email.utils import parseaddr
from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from storefront.errors import ValidationError

# skus, option names and option values end up in URLs and SKUs
RESTRICTED_PATTERN = re.compile(r"^[a-zA-Z\-_]{1,50}$")


def restricted_string_is_valid(value):
    return bool(value) and RESTRICTED_PATTERN.fullmatch(value) is not None


def _check_restricted(value, label):
    if not restricted_string_is_valid(value):
        raise ValueError(f"the {label} received ({value}) is invalid")
    return value


class StrictModel(BaseModel):
    model_config = {"extra": "forbid"}


class UpdateModel(StrictModel):
    """All fields optional, but at least one must be sent."""

    @model_validator(mode="after")
    def require_some_field(self):
        if not self.model_fields_set:
            raise ValueError("Invalid input provided in request body")
        return self

    def changes(self):
        return self.model_dump(exclude_unset=True)


class ProductImageCreationInput(StrictModel):
    type: Literal["base64", "url"] = Field(description="How ``data`` is encoded")
    data: str = Field(min_length=1)
    is_primary: bool = False

    @field_validator("type", mode="before")
    @classmethod
    def lowercase_type(cls, v):
        return v.lower() if isinstance(v, str) else v


class ProductOptionCreationInput(StrictModel):
    name: str
    values: list[str] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _check_restricted(v, "option name")

    @field_validator("values")
    @classmethod
    def validate_values(cls, v: list[str]) -> list[str]:
        for value in v:
            _check_restricted(value, "option value")
        # values become lowercased sku fragments
        if len({value.lower() for value in v}) != len(v):
            raise ValueError("option values must be unique, ignoring case")
        return v


class _ProductFields(StrictModel):
    subtitle: str = ""
    description: str = ""
    upc: str = ""
    manufacturer: str = ""
    brand: str = ""
    quantity: int = Field(default=0, ge=0)
    quantity_per_package: int = Field(default=1, ge=0)
    taxable: bool = False
    price: float = Field(default=0, ge=0)
    on_sale: bool = False
    sale_price: float = Field(default=0, ge=0)
    cost: float = Field(default=0, ge=0)
    product_weight: float = Field(default=0, ge=0)
    product_height: float = Field(default=0, ge=0)
    product_width: float = Field(default=0, ge=0)
    product_length: float = Field(default=0, ge=0)
    package_weight: float = Field(default=0, ge=0)
    package_height: float = Field(default=0, ge=0)
    package_width: float = Field(default=0, ge=0)
    package_length: float = Field(default=0, ge=0)
    available_on: datetime | None = None


class ProductCreationInput(_ProductFields):
    name: str = Field(min_length=1)
    sku: str
    images: list[ProductImageCreationInput] = Field(default_factory=list)
    options: list[ProductOptionCreationInput] = Field(default_factory=list)

    @field_validator("sku")
    @classmethod
    def validate_sku(cls, v: str) -> str:
        return _check_restricted(v, "sku")

    @field_validator("quantity_per_package")
    @classmethod
    def at_least_one_per_package(cls, v: int) -> int:
        return max(v, 1)

    @field_validator("options")
    @classmethod
    def unique_option_names(cls, v):
        names = [o.name for o in v]
        if len(set(names)) != len(names):
            raise ValueError("option names must be unique")
        return v

    def template(self):
        """Fields every generated product shares."""
        return self.model_dump(exclude={"sku", "images", "options"})


class ProductUpdateInput(UpdateModel):
    name: str | None = Field(default=None, min_length=1)
    subtitle: str | None = None
    description: str | None = None
    option_summary: str | None = None
    sku: str | None = None
    upc: str | None = None
    manufacturer: str | None = None
    brand: str | None = None
    quantity: int | None = Field(default=None, ge=0)
    quantity_per_package: int | None = Field(default=None, ge=1)
    taxable: bool | None = None
    price: float | None = Field(default=None, ge=0)
    on_sale: bool | None = None
    sale_price: float | None = Field(default=None, ge=0)
    cost: float | None = Field(default=None, ge=0)
    product_weight: float | None = Field(default=None, ge=0)
    product_height: float | None = Field(default=None, ge=0)
    product_width: float | None = Field(default=None, ge=0)
    product_length: float | None = Field(default=None, ge=0)
    package_weight: float | None = Field(default=None, ge=0)
    package_height: float | None = Field(default=None, ge=0)
    package_width: float | None = Field(default=None, ge=0)
    package_length: float | None = Field(default=None, ge=0)
    available_on: datetime | None = None
    primary_image_id: int | None = None

    @field_validator("sku")
    @classmethod
    def validate_sku(cls, v):
        if v is None:
            return v
        return _check_restricted(v, "sku")


class ProductOptionUpdateInput(UpdateModel):
    name: str

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _check_restricted(v, "option name")


class ProductOptionValueInput(StrictModel):
    value: str

    @field_validator("value")
    @classmethod
    def validate_value(cls, v: str) -> str:
        return _check_restricted(v, "option value")


class DiscountCreationInput(StrictModel):
    name: str = Field(min_length=1)
    discount_type: Literal["percentage", "flat_amount"]
    amount: float = Field(gt=0)
    starts_on: datetime | None = None
    expires_on: datetime | None = None
    requires_code: bool = False
    code: str = ""
    limited_use: bool = False
    number_of_uses: int = Field(default=0, ge=0)
    login_required: bool = False

    @model_validator(mode="after")
    def code_when_required(self):
        if self.requires_code and not self.code:
            raise ValueError("a code must be provided when requires_code is set")
        if self.starts_on and self.expires_on and self.expires_on <= self.starts_on:
            raise ValueError("expires_on must be after starts_on")
        return self


class DiscountUpdateInput(UpdateModel):
    name: str | None = Field(default=None, min_length=1)
    discount_type: Literal["percentage", "flat_amount"] | None = None
    amount: float | None = Field(default=None, gt=0)
    starts_on: datetime | None = None
    expires_on: datetime | None = None
    requires_code: bool | None = None
    code: str | None = None
    limited_use: bool | None = None
    number_of_uses: int | None = Field(default=None, ge=0)
    login_required: bool | None = None


WebhookEvent = Literal["product_created", "product_updated", "product_archived"]
WebhookContentType = Literal["application/json", "application/xml"]


class WebhookCreationInput(StrictModel):
    url: str
    event_type: WebhookEvent
    content_type: WebhookContentType = "application/json"

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("url must be an http(s) URL")
        return v

    @field_validator("content_type", mode="before")
    @classmethod
    def lowercase_content_type(cls, v):
        return v.lower() if isinstance(v, str) else v


class WebhookUpdateInput(UpdateModel):
    url: str | None = None
    event_type: WebhookEvent | None = None
    content_type: WebhookContentType | None = None

    @field_validator("url")
    @classmethod
    def validate_url(cls, v):
        if v is not None and not v.startswith(("http://", "https://")):
            raise ValueError("url must be an http(s) URL")
        return v


def _check_email(value):
    _, address = parseaddr(value)
    if not address or "@" not in address or address != value.strip():
        raise ValueError("email address must be valid")
    local, _, domain = address.rpartition("@")
    if not local or "." not in domain:
        raise ValueError("email address must be valid")
    return address


class UserCreationInput(StrictModel):
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    username: str = Field(min_length=1)
    email: str
    password: str = Field(min_length=32)
    is_admin: bool = False

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return _check_email(v)


class UserUpdateInput(StrictModel):
    current_password: str
    first_name: str | None = Field(default=None, min_length=1)
    last_name: str | None = Field(default=None, min_length=1)
    username: str | None = Field(default=None, min_length=1)
    email: str | None = None
    new_password: str | None = Field(default=None, min_length=32)
    is_admin: bool | None = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        return v if v is None else _check_email(v)

    def changes(self):
        return self.model_dump(exclude_unset=True, exclude={"current_password", "new_password"})


def parse_body(schema, payload):
    """Validate a decoded JSON body against ``schema``.

    A missing or non-object body is a ValidationError; field problems
    surface as pydantic's own ValidationError, rendered by the error
    handlers.
    """
    if not isinstance(payload, dict):
        raise ValidationError("Invalid input provided in request body")
    return schema.model_validate(payload)
