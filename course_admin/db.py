import logging

from mongoengine import connect, disconnect
from mongoengine.connection import get_db as _get_db

from course_admin.models import ALL_DOCUMENTS

logger = logging.getLogger(__name__)


def init_db(config):
    """Connect mongoengine (and the raw pymongo handle behind it) for an app."""
    # Drop any earlier default connection so cached collections rebind
    disconnect()

    kwargs = {"db": config.DB_NAME, "host": config.MONGO_URI}
    if config.MONGO_CLIENT_CLASS is not None:
        kwargs["mongo_client_class"] = config.MONGO_CLIENT_CLASS

    try:
        connect(**kwargs)
    except Exception as e:
        logger.error("❌ MongoDB connection failed: %s", e)
        raise

    # Ensure indexes for uniqueness constraints up front
    for document in ALL_DOCUMENTS:
        document.ensure_indexes()

    logger.info("✅ MongoDB connected successfully (db=%s)", config.DB_NAME)
    return get_db()


def get_db():
    """Raw pymongo database, used for the per-cohort partitions."""
    return _get_db()
