from datetime import datetime, timezone

from mongoengine import Document, DateTimeField


def utcnow():
    return datetime.now(timezone.utc)


class TimestampedDocument(Document):
    """Adds createdAt / updatedAt, refreshed on every save."""

    created_at = DateTimeField(db_field="createdAt", default=utcnow)
    updated_at = DateTimeField(db_field="updatedAt", default=utcnow)

    meta = {"abstract": True}

    def save(self, *args, **kwargs):
        self.updated_at = utcnow()
        return super().save(*args, **kwargs)


def iso(value):
    return value.isoformat() if value else None


def ref_id(value):
    """String id of a reference that may be a document, a lazy ref or None."""
    if value is None:
        return None
    return str(getattr(value, "pk", value))
