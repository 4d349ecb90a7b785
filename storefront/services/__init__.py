import logging
from contextlib import contextmanager

from flask import current_app
from sqlalchemy.exc import IntegrityError

from storefront.errors import ConflictError, InternalError, StorefrontError
from storefront.extensions import db

logger = logging.getLogger(__name__)


@contextmanager
def atomic(task, conflict_message=None):
    """Run the block in one transaction, committing only if it all succeeds.

    Any exception rolls the session back. API errors are re-raised as they
    are. A uniqueness violation becomes a ConflictError when
    ``conflict_message`` is given; anything else is logged against ``task``
    and surfaced as a generic InternalError.
    """
    try:
        yield db.session
        db.session.commit()
    except StorefrontError:
        db.session.rollback()
        raise
    except IntegrityError as e:
        db.session.rollback()
        if conflict_message is None:
            logger.exception("Encountered error trying to %s", task)
            raise InternalError(task) from e
        logger.info("Uniqueness violation trying to %s: %s", task, e.orig)
        raise ConflictError(conflict_message) from e
    except Exception as e:
        db.session.rollback()
        logger.exception("Encountered error trying to %s", task)
        raise InternalError(task) from e


def paginate(query, page=1, limit=None):
    """Page through ``query``; returns the list-response envelope fields."""
    default_limit = current_app.config["DEFAULT_PAGE_SIZE"]
    max_limit = current_app.config["MAX_PAGE_SIZE"]
    page = max(page or 1, 1)
    limit = default_limit if limit is None else max(min(limit, max_limit), 1)
    pagination = query.paginate(page=page, per_page=limit, error_out=False)
    return {
        "count": pagination.total,
        "limit": limit,
        "page": page,
        "items": pagination.items,
    }


def active_filter(query, model, include_archived=False):
    if include_archived:
        return query
    return query.filter(model.archived_on.is_(None))
