from flask import Blueprint, request, jsonify

from course_admin.partitions import get_partition_manager
from course_admin.utils import get_json_body, clean_token, require_fields

cohorts_bp = Blueprint("cohorts_bp", __name__, url_prefix="/api/course-year-month-batch")

REQUIRED_LABELS = {
    "course": "Course",
    "year": "Year",
    "month": "Month",
    "batch": "Batch",
    "studentId": "Student ID",
}


# ----------------- RECORD MEMBERSHIP -----------------

@cohorts_bp.route("/add-student", methods=["POST"])
def add_student_to_cohort():
    data = get_json_body()
    require_fields(data, *REQUIRED_LABELS, message="Validation failed", labels=REQUIRED_LABELS)

    result = get_partition_manager().record_membership(
        data["course"], data["year"], data["month"], data["batch"], data["studentId"]
    )
    summary = result["summary"]
    cohort = result["cohort"]

    return jsonify({
        "success": True,
        "message": "Student added to CourseYearMonthBatch successfully",
        "courseYearMonthBatch": {
            "_id": str(summary.pk),
            "course": cohort.course.name,
            "year": cohort.year_label,
            "month": cohort.month.name,
            "batch": cohort.batch.name,
            "totalStudents": summary.total_students,
            "collectionName": result["collectionName"],
        },
    }), 201


# ----------------- QUERY SUMMARIES -----------------

@cohorts_bp.route("", methods=["GET"])
def get_cohorts():
    tokens = {name: clean_token(request.args.get(name)) for name in ("course", "year", "month", "batch")}
    results = get_partition_manager().find_summaries(**tokens)

    cohorts = [
        summary.to_dict(students=[s.summary() for s in students])
        for summary, students in results
    ]
    message = (
        f"Found {len(cohorts)} CourseYearMonthBatch documents"
        if cohorts else "No CourseYearMonthBatch found matching the criteria"
    )
    return jsonify({
        "success": True,
        "message": message,
        "count": len(cohorts),
        "courseYearMonthBatches": cohorts,
        "query": {k: v for k, v in tokens.items() if v},
    }), 200
