"""Liveness endpoint: database, Redis and webhook queue depth."""
import logging

from storefront import extensions as ext

logger = logging.getLogger(__name__)

NOT_CONFIGURED = "not configured"


def _check_db():
    ext.db.session.execute(ext.db.text("SELECT 1"))
    return "ok"


def _check_redis():
    if not ext.redis_client:
        return NOT_CONFIGURED
    ext.redis_client.ping()
    return "ok"


def _webhook_queue_depth():
    return len(ext.task_queue)


PROBES = (
    ("db", _check_db),
    ("redis", _check_redis),
    ("webhook_queue", _webhook_queue_depth),
)


def run_checks():
    """Run every probe. A failing probe reads ``error``; details stay in the log."""
    checks = {"status": "ok"}
    for name, probe in PROBES:
        try:
            checks[name] = probe()
        except Exception:
            logger.exception("Health check %s probe failed", name)
            checks[name] = "error"
            checks["status"] = "degraded"
    return checks


def register_health(app):
    @app.route("/health")
    def health():
        checks = run_checks()
        return checks, 200 if checks["status"] == "ok" else 503
