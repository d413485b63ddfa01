from bson import ObjectId
from flask import request

from course_admin.errors import ValidationFailed


def is_object_id(value):
    return isinstance(value, ObjectId) or (isinstance(value, str) and ObjectId.is_valid(value))


def to_object_id(value, label="id"):
    """Parse a path/body id, rejecting malformed ones before any store access."""
    if isinstance(value, ObjectId):
        return value
    if not is_object_id(value):
        raise ValidationFailed(f"Invalid {label} format", searchedValue=value)
    return ObjectId(value)


def get_json_body():
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationFailed("Invalid or missing JSON body")
    return data


def clean_token(value):
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def require_fields(data, *fields, message="Missing required fields", labels=None):
    """Raise ValidationFailed listing every blank field, in the order given."""
    labels = labels or {}
    missing = [f for f in fields if not clean_token(data.get(f))]
    if missing:
        raise ValidationFailed(
            message,
            errors=[f"{labels.get(f, f)} is required" for f in missing],
            missingFields=missing,
        )
