import logging
from contextlib import contextmanager
from extensions import db

logger = logging.getLogger(__name__)


@contextmanager
def transaction():
    """Commit everything done inside the block, or roll all of it back."""
    try:
        yield db.session
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        logger.error("Database transaction rolled back: %s", e)
        raise
