import os

from dotenv import load_dotenv
from flask import Flask, send_from_directory

load_dotenv()


def create_app(config_name=None):
    flask_app = Flask(__name__)

    if config_name is None:
        config_name = os.environ.get("FLASK_ENV")
        if not config_name:
            if os.environ.get("PORT"):
                config_name = "production"
            else:
                config_name = "development"

    from storefront.config import config_map

    config_cls = config_map.get(config_name, config_map["development"])
    flask_app.config.from_object(config_cls)

    if hasattr(config_cls, "init_app"):
        config_cls.init_app(flask_app)

    # Initialize extensions
    from storefront.extensions import db, migrate, init_redis, init_image_storage

    db.init_app(flask_app)
    migrate.init_app(flask_app, db)
    init_redis(flask_app)
    init_image_storage(flask_app)

    # Import models so Alembic sees them
    from storefront import models  # noqa: F401

    from storefront.blueprints.api import api_bp
    from storefront.errors import register_error_handlers

    flask_app.register_blueprint(api_bp, url_prefix="/v1")
    register_error_handlers(flask_app)

    from storefront.cli import register_cli

    register_cli(flask_app)

    if flask_app.config["IMAGE_STORAGE_TYPE"] == "local":
        storage_dir = os.path.abspath(flask_app.config["IMAGE_STORAGE_DIR"])

        @flask_app.route("/product_images/<path:key>")
        def product_image(key):
            return send_from_directory(storage_dir, key, mimetype="image/png")

    from storefront.health import register_health

    register_health(flask_app)

    return flask_app
