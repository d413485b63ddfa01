from flask import Blueprint, request, jsonify

from course_admin import taxonomy
from course_admin.errors import ValidationFailed
from course_admin.models import Student
from course_admin.partitions import get_partition_manager
from course_admin.resolver import resolve_cohort
from course_admin.utils import get_json_body, clean_token, require_fields

students_bp = Blueprint("students_bp", __name__, url_prefix="/api")

COHORT_PARAMS = ("course", "year", "month", "batch")


def cohort_args():
    """The four cohort tokens from the query string, all required."""
    values = {name: clean_token(request.args.get(name)) for name in COHORT_PARAMS}
    missing = [name for name, value in values.items() if not value]
    if missing:
        raise ValidationFailed(
            "Missing required query parameters",
            errors=[f"{name} is required" for name in missing],
            requiredParams=list(COHORT_PARAMS),
        )
    return values


# ----------------- STUDENTS CRUD -----------------

# Filters on the free-text labels stored on each student, not on the references
@students_bp.route("/students", methods=["GET"])
def get_students():
    query = {}
    for name in COHORT_PARAMS:
        value = clean_token(request.args.get(name))
        if value:
            query[name] = value

    filters = {f"{name}__icontains": value for name, value in query.items()}
    students = [s.to_dict() for s in Student.objects(**filters)]
    return jsonify({"success": True, "count": len(students), "students": students, "query": query}), 200


@students_bp.route("/students/add", methods=["POST"])
def add_student():
    data = get_json_body()
    student = taxonomy.create_student(data)
    return jsonify({"success": True, "message": "Student added successfully", "student": student.to_dict()}), 201


@students_bp.route("/students/<student_id>", methods=["DELETE"])
def remove_student(student_id):
    student = taxonomy.delete_student(student_id)
    return jsonify({"success": True, "message": "Student deleted successfully", "student": student.summary()}), 200


@students_bp.route("/students/check-email", methods=["GET"])
def check_email():
    email = clean_token(request.args.get("email"))
    if not email:
        raise ValidationFailed("Email is required")
    return jsonify({"success": True, "exists": taxonomy.find_student_by_email(email) is not None}), 200


@students_bp.route("/students/update-by-email", methods=["PUT"])
def update_by_email():
    data = dict(get_json_body())
    email = clean_token(data.pop("email", None))
    if not email:
        raise ValidationFailed("Email is required for update")

    student = taxonomy.update_student_by_email(email, data)
    return jsonify({"success": True, "message": "Student updated successfully", "student": student.to_dict()}), 200


# ----------------- COHORT PARTITIONS -----------------

@students_bp.route("/students/add-to-dynamic-collection", methods=["POST"])
def add_to_dynamic_collection():
    data = get_json_body()
    require_fields(data, "studentId", *COHORT_PARAMS)

    details = data.get("additionalDetails") or {}
    if not isinstance(details, dict):
        raise ValidationFailed("additionalDetails must be an object")

    result = get_partition_manager().record_membership(
        data["course"], data["year"], data["month"], data["batch"], data["studentId"], details
    )
    cohort, student = result["cohort"], result["student"]
    return jsonify({
        "success": True,
        "message": "Student added to dynamic collection successfully",
        "collectionName": result["collectionName"],
        "entry": {
            "studentName": student.full_name,
            "course": cohort.course.name,
            "year": cohort.year_label,
            "month": cohort.month.name,
            "batch": cohort.batch.name,
        },
        "totalStudents": result["summary"].total_students,
    }), 201


@students_bp.route("/students/list", methods=["GET"])
def list_partition_students():
    args = cohort_args()
    cohort, collection_name, members = get_partition_manager().list_members(
        args["course"], args["year"], args["month"], args["batch"]
    )

    students = []
    for record, student in members:
        entry = student.to_dict()
        entry.update({
            "dynamicCollectionId": str(record["_id"]),
            "course": cohort.course.name,
            "batch": cohort.batch.name,
            "year": record["year"],
            "month": cohort.month.name,
            "additionalDetails": record.get("additionalDetails", {}),
        })
        students.append(entry)

    return jsonify({
        "success": True,
        "message": "Students retrieved successfully",
        "count": len(students),
        "students": students,
        "collectionName": collection_name,
    }), 200


@students_bp.route("/debug-references", methods=["GET"])
def debug_references():
    args = cohort_args()
    cohort = resolve_cohort(args["course"], args["year"], args["month"], args["batch"])
    return jsonify({"success": True, **cohort.to_dict()}), 200
