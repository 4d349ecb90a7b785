import base64
import binascii
import io

import httpx
from flask import current_app
from PIL import Image as PILImage

from storefront.errors import ValidationError

ALLOWED_FORMATS = {"PNG", "JPEG"}
THUMBNAIL_SIZE = (100, 100)
MAIN_SIZE = (500, 500)


def load_image(image_bytes):
    """Decode and verify uploaded image bytes.

    - Checks file size
    - Verifies it's a real image via Pillow
    - Only PNG and JPEG are accepted

    Returns:
        A loaded Pillow image

    Raises:
        ValidationError on invalid input
    """
    max_bytes = current_app.config["IMAGE_MAX_BYTES"]
    if len(image_bytes) > max_bytes:
        raise ValidationError(f"Image too large: {len(image_bytes)} bytes (max {max_bytes})")

    try:
        img = PILImage.open(io.BytesIO(image_bytes))
        img.verify()  # verify it's a real image
    except Exception:
        raise ValidationError("Invalid image file")

    if img.format not in ALLOWED_FORMATS:
        raise ValidationError("only PNG and JPEG images are accepted")

    # Re-open: verify() leaves the image unusable
    img = PILImage.open(io.BytesIO(image_bytes))
    img.load()
    return img


def decode_base64_image(data):
    """Raw base64 only, not a ``data:image/png;base64,...`` URI."""
    try:
        raw = base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError):
        raise ValidationError("image data is not valid base64")
    return load_image(raw)


def download_image(url):
    try:
        resp = httpx.get(url, timeout=current_app.config["WEBHOOK_TIMEOUT"], follow_redirects=True)
        resp.raise_for_status()
    except httpx.HTTPError as e:
        raise ValidationError(f"error retrieving product image from url {url}") from e
    return load_image(resp.content)


def image_from_input(image_input, index):
    """Load the image described by a ProductImageCreationInput."""
    try:
        if image_input.type == "base64":
            return decode_base64_image(image_input.data)
        return download_image(image_input.data)
    except ValidationError as e:
        raise ValidationError(f"image data at index {index} is invalid: {e.message}") from e


def create_thumbnail(img, max_size):
    """Scaled copy that fits inside ``max_size``, keeping aspect ratio."""
    thumb = img.copy()
    if thumb.mode not in ("RGB", "RGBA", "L"):
        thumb = thumb.convert("RGBA")
    thumb.thumbnail(max_size, PILImage.LANCZOS)
    return thumb


def encode_png(img):
    if img.mode == "CMYK":
        img = img.convert("RGB")
    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()
