"""Exception taxonomy and the Flask handlers that turn it into JSON responses."""
import logging

from flask import jsonify, current_app
from mongoengine.errors import ValidationError as DocumentValidationError, NotUniqueError, DoesNotExist
from pymongo.errors import DuplicateKeyError
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


class CourseAdminError(Exception):
    """Base exception; carries the HTTP status and extra payload keys."""

    status_code = 500

    def __init__(self, message, **context):
        super().__init__(message)
        self.message = message
        self.context = context

    def to_dict(self):
        payload = {"success": False, "message": self.message}
        payload.update(self.context)
        return payload


class ValidationFailed(CourseAdminError):
    """Missing or malformed input, detected before touching the store."""

    status_code = 400

    def __init__(self, message, errors=None, **context):
        if errors:
            context["errors"] = list(errors)
        super().__init__(message, **context)


class NotFound(CourseAdminError):
    status_code = 404


AVAILABLE_KEYS = {
    "course": "availableCourses",
    "year": "availableYears",
    "month": "availableMonths",
    "batch": "availableBatches",
}


class ReferenceNotFound(NotFound):
    """A course/year/month/batch/student token did not resolve in its scope."""

    def __init__(self, level, searched, available=None, scope=None):
        self.level = level
        context = {"level": level, "searchedValue": searched}
        if scope:
            context.update(scope)
        if available is not None:
            context[AVAILABLE_KEYS[level]] = available
        super().__init__(f"{level.capitalize()} not found", **context)


class Conflict(CourseAdminError):
    status_code = 409


class AlreadyMember(Conflict):
    """The student already has a record in the cohort partition."""

    def __init__(self, collection_name, student_id):
        super().__init__(
            "Student is already a member of this cohort",
            alreadyMember=True,
            collectionName=collection_name,
            studentId=student_id,
        )


def error_response(payload, status):
    return jsonify(payload), status


def handle_course_admin_error(e):
    logger.warning("%s (%s): %s", type(e).__name__, e.status_code, e.message)
    return error_response(e.to_dict(), e.status_code)


def handle_document_validation(e):
    errors = [str(err) for err in (e.errors or {}).values()] or [str(e)]
    logger.warning("Document validation failed: %s", errors)
    return error_response({"success": False, "message": "Validation failed", "errors": errors}, 400)


def handle_duplicate(e):
    logger.warning("Duplicate key rejected by the store: %s", e)
    return error_response({"success": False, "message": "Record already exists"}, 409)


def handle_dangling_reference(e):
    logger.warning("Dangling reference: %s", e)
    return error_response({"success": False, "message": "Referenced record no longer exists"}, 404)


def handle_http_error(e):
    return error_response({"success": False, "message": e.description}, e.code)


def handle_unexpected(e):
    logger.exception("Unhandled error")
    payload = {"success": False, "message": "Internal server error"}
    if not current_app.config["SETTINGS"].is_production:
        payload["error"] = {"message": str(e), "name": type(e).__name__}
    return error_response(payload, 500)


def register_error_handlers(app):
    app.register_error_handler(CourseAdminError, handle_course_admin_error)
    app.register_error_handler(DocumentValidationError, handle_document_validation)
    app.register_error_handler(NotUniqueError, handle_duplicate)
    app.register_error_handler(DuplicateKeyError, handle_duplicate)
    app.register_error_handler(DoesNotExist, handle_dangling_reference)
    app.register_error_handler(HTTPException, handle_http_error)
    app.register_error_handler(Exception, handle_unexpected)
