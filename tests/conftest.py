import base64
import io
from unittest.mock import MagicMock

import pytest
from PIL import Image as PILImage

import storefront.extensions as ext
from storefront import create_app
from storefront.extensions import db as _db
from storefront.services.storage_service import LocalImageStorer


@pytest.fixture(scope="session")
def app():
    """Create application for testing."""
    app = create_app("testing")
    with app.app_context():
        _db.create_all()
        yield app
        _db.drop_all()


@pytest.fixture
def db(app):
    """Database handle; every row written during the test is removed after it.

    Services commit their own transactions, so a wrapping rollback is not
    enough.
    """
    yield _db
    session = _db.session()
    session.rollback()
    for table in reversed(_db.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    _db.session.remove()


@pytest.fixture
def client(app, db):
    return app.test_client()


@pytest.fixture(autouse=True)
def image_storer(monkeypatch, tmp_path):
    storer = LocalImageStorer(str(tmp_path), "http://testserver")
    monkeypatch.setattr(ext, "image_storer", storer)
    return storer


@pytest.fixture
def task_queue(monkeypatch):
    queue = MagicMock()
    queue.enqueue.return_value = MagicMock(id="job-1")
    monkeypatch.setattr(ext, "task_queue", queue)
    return queue


def make_png(size=(20, 10), color=(255, 0, 0)):
    buffer = io.BytesIO()
    PILImage.new("RGB", size, color).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def png_factory():
    return make_png


@pytest.fixture
def png_base64():
    return base64.b64encode(make_png()).decode("ascii")


@pytest.fixture
def shirt_body():
    return {
        "name": "Shirt",
        "sku": "shirt",
        "price": 20,
        "options": [
            {"name": "color", "values": ["red", "blue"]},
            {"name": "size", "values": ["S", "M"]},
        ],
    }
