"""Product image storage backends.

The backend is picked from ``IMAGE_STORAGE_TYPE`` when the app is created;
both implementations share thumbnail generation and the storage key layout
``{sku}/{index}/{thumbnail,main,original}.png``.
"""
import logging
import os
from dataclasses import dataclass

import boto3
from botocore.config import Config as BotoConfig

from storefront.services import image_service

logger = logging.getLogger(__name__)

IMAGE_VARIANTS = ("thumbnail", "main", "original")


@dataclass
class ProductImageSet:
    thumbnail: object
    main: object
    original: object


@dataclass
class ProductImageLocations:
    thumbnail: str
    main: str
    original: str


class ImageStorer:
    def create_thumbnails(self, img):
        return ProductImageSet(
            thumbnail=image_service.create_thumbnail(img, image_service.THUMBNAIL_SIZE),
            main=image_service.create_thumbnail(img, image_service.MAIN_SIZE),
            original=img,
        )

    def image_keys(self, sku, index):
        return {variant: f"{sku}/{index}/{variant}.png" for variant in IMAGE_VARIANTS}

    def store_images(self, image_set, sku, index):
        locations = {}
        for variant, key in self.image_keys(sku, index).items():
            data = image_service.encode_png(getattr(image_set, variant))
            locations[variant] = self.save(key, data)
        return ProductImageLocations(**locations)

    def discard_images(self, sku, index):
        """Remove what ``store_images`` wrote; failures are only logged."""
        keys = list(self.image_keys(sku, index).values())
        try:
            self.delete_many(keys)
        except Exception:
            logger.warning("Failed to discard stored images %s", keys, exc_info=True)

    def save(self, key, data):
        """Persist ``data`` under ``key`` and return its public URL."""
        raise NotImplementedError

    def delete_many(self, keys):
        raise NotImplementedError


class LocalImageStorer(ImageStorer):
    """Writes PNGs to disk; served by the app under /product_images/."""

    ROUTE_PREFIX = "product_images"

    def __init__(self, storage_dir, base_url):
        self.storage_dir = storage_dir
        self.base_url = base_url.rstrip("/")

    def save(self, key, data):
        path = os.path.join(self.storage_dir, key)
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "wb") as f:
            f.write(data)
        return f"{self.base_url}/{self.ROUTE_PREFIX}/{key}"

    def delete_many(self, keys):
        for key in keys:
            path = os.path.join(self.storage_dir, key)
            if os.path.exists(path):
                os.remove(path)


class S3ImageStorer(ImageStorer):
    def __init__(self, config):
        self.bucket = config["S3_BUCKET_NAME"]
        self.public_url = config["S3_PUBLIC_URL"].rstrip("/")
        self.client = boto3.client(
            "s3",
            endpoint_url=config["S3_ENDPOINT_URL"] or None,
            aws_access_key_id=config["S3_ACCESS_KEY"],
            aws_secret_access_key=config["S3_SECRET_KEY"],
            region_name=config["S3_REGION"],
            config=BotoConfig(signature_version="s3v4"),
        )

    def save(self, key, data):
        self.client.put_object(
            Bucket=self.bucket,
            Key=key,
            Body=data,
            ContentType="image/png",
            ACL="public-read",
        )
        return f"{self.public_url}/{key}"

    def delete_many(self, keys):
        if not keys:
            return
        self.client.delete_objects(
            Bucket=self.bucket,
            Delete={"Objects": [{"Key": k} for k in keys]},
        )


def _local(config):
    return LocalImageStorer(config["IMAGE_STORAGE_DIR"], config["IMAGE_BASE_URL"])


STORERS = {
    "local": _local,
    "s3": S3ImageStorer,
}


def build_image_storer(config):
    storage_type = config.get("IMAGE_STORAGE_TYPE", "local")
    try:
        factory = STORERS[storage_type]
    except KeyError:
        raise RuntimeError(
            f"Unknown IMAGE_STORAGE_TYPE {storage_type!r} (expected one of {sorted(STORERS)})"
        )
    logger.info("Using %s image storage", storage_type)
    return factory(config)
