import logging
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
import redis as _redis
from rq import Queue

logger = logging.getLogger(__name__)

db = SQLAlchemy()
migrate = Migrate()

# Initialized lazily in create_app
redis_client: _redis.Redis = None  # type: ignore
task_queue = None
image_storer = None


class DummyQueue:
    """No-op queue for development without Redis."""

    max_length = 0

    def __len__(self):
        return 0

    def enqueue(self, *args, **kwargs):
        logger.warning("Redis not available, skipping job enqueue: %s", args[:1])
        return None


class BoundedQueue:
    """RQ queue that refuses new jobs once ``max_length`` are waiting.

    A refused job is logged and ``enqueue`` returns None, so callers can
    count what was dropped.
    """

    def __init__(self, queue, max_length):
        self.queue = queue
        self.max_length = max_length

    def __len__(self):
        return self.queue.count

    def enqueue(self, *args, **kwargs):
        waiting = len(self)
        if self.max_length and waiting >= self.max_length:
            logger.warning(
                "Queue %s is full (%d waiting), dropping job: %s",
                self.queue.name,
                waiting,
                args[:1],
            )
            return None
        return self.queue.enqueue(*args, **kwargs)


def init_redis(app):
    global redis_client, task_queue
    redis_url = app.config.get("REDIS_URL", "")
    if not redis_url:
        logger.warning("REDIS_URL not set, queue disabled (dev mode)")
        task_queue = DummyQueue()
        return

    try:
        redis_client = _redis.from_url(redis_url, decode_responses=False)
        redis_client.ping()
        task_queue = BoundedQueue(
            Queue(app.config["WEBHOOK_QUEUE_NAME"], connection=redis_client),
            app.config["WEBHOOK_QUEUE_MAX_LENGTH"],
        )
    except Exception as e:
        logger.warning("Redis connection failed (%s), queue disabled", e)
        task_queue = DummyQueue()


def init_image_storage(app):
    global image_storer
    from storefront.services.storage_service import build_image_storer

    image_storer = build_image_storer(app.config)
