from flask import Blueprint, jsonify

from course_admin import taxonomy
from course_admin.errors import ValidationFailed
from course_admin.models import Course, Year, Month, Batch, Student
from course_admin.utils import get_json_body, clean_token, require_fields

courses_bp = Blueprint("courses_bp", __name__, url_prefix="/api")


# ----------------- COURSES -----------------

@courses_bp.route("/courses/add", methods=["POST"])
def add_course():
    data = get_json_body()
    # accept both "course" and "name"
    name = clean_token(data.get("course")) or clean_token(data.get("name"))
    description = clean_token(data.get("description"))

    if not name or not description:
        raise ValidationFailed("Course name and description are required")

    course = taxonomy.add_course(name, description)
    return jsonify({"success": True, "message": "Course added successfully", "course": course.to_dict()}), 201


@courses_bp.route("/courses", methods=["GET"])
def get_courses():
    courses = [c.to_dict() for c in Course.objects.order_by("name")]
    return jsonify({"success": True, "count": len(courses), "courses": courses}), 200


@courses_bp.route("/courses/delete/<course_id>", methods=["DELETE"])
def delete_course(course_id):
    course = taxonomy.delete_course(course_id)
    return jsonify({"success": True, "message": "Course deleted successfully", "course": course.to_dict()}), 200


# ----------------- YEARS OF A COURSE -----------------

@courses_bp.route("/courses/<course_id>/years/add", methods=["POST"])
def add_year_to_course(course_id):
    data = get_json_body()
    year_label = clean_token(data.get("year"))
    if not year_label:
        raise ValidationFailed("Course ID and year are required")

    course = taxonomy.get_course(course_id)
    year = taxonomy.add_year(course, year_label, clean_token(data.get("description")))
    return jsonify({"success": True, "message": "Year added successfully", "year": year.to_dict()}), 201


@courses_bp.route("/courses/<course_id>/years", methods=["GET"])
def get_course_years(course_id):
    course = taxonomy.get_course(course_id)
    years = [y.to_dict() for y in Year.objects(course=course).order_by("year")]
    return jsonify({"success": True, "years": years}), 200


# ----------------- MONTHS OF A YEAR -----------------

@courses_bp.route("/years/<year_id>/months/add", methods=["POST"])
def add_month_to_year(year_id):
    data = get_json_body()
    name = clean_token(data.get("month")) or clean_token(data.get("name"))
    if not name:
        raise ValidationFailed("Year ID and month are required")

    year = taxonomy.get_year(year_id)
    month = taxonomy.add_month(year, name)
    return jsonify({"success": True, "message": "Month added successfully", "month": month.to_dict()}), 201


@courses_bp.route("/years/<year_id>/months", methods=["GET"])
def get_year_months(year_id):
    year = taxonomy.get_year(year_id)
    months = [m.to_dict() for m in Month.objects(year=year)]
    return jsonify({"success": True, "months": months}), 200


# ----------------- BATCHES OF A MONTH -----------------

@courses_bp.route("/months/<month_id>/batches/add", methods=["POST"])
def add_batch_to_month(month_id):
    data = get_json_body()
    name = clean_token(data.get("batch")) or clean_token(data.get("name"))
    if not name:
        raise ValidationFailed("Month ID and batch are required")

    month = taxonomy.get_month(month_id)
    batch = taxonomy.add_batch(month, name, clean_token(data.get("description")))
    return jsonify({"success": True, "message": "Batch added successfully", "batch": batch.to_dict()}), 201


@courses_bp.route("/months/<month_id>/batches", methods=["GET"])
def get_month_batches(month_id):
    month = taxonomy.get_month(month_id)
    batches = [b.to_dict() for b in Batch.objects(month=month)]
    return jsonify({"success": True, "batches": batches}), 200


# ----------------- STUDENTS OF A BATCH -----------------

@courses_bp.route("/batches/<batch_id>/students/add", methods=["POST"])
def add_student_to_batch(batch_id):
    data = get_json_body()
    require_fields(data, "firstName", "lastName", "email")

    batch = taxonomy.get_batch(batch_id)
    student = taxonomy.add_student_to_batch(batch, data)
    return jsonify({"success": True, "message": "Student added successfully", "student": student.to_dict()}), 201


@courses_bp.route("/batches/<batch_id>/students", methods=["GET"])
def get_batch_students(batch_id):
    batch = taxonomy.get_batch(batch_id)
    ids = [ref.pk for ref in batch.students]
    students = [s.to_dict() for s in Student.objects(id__in=ids)]
    return jsonify({"success": True, "count": len(students), "students": students}), 200


# ----------------- FLAT LISTS -----------------

@courses_bp.route("/batches", methods=["GET"])
def get_all_batches():
    batches = [b.to_dict() for b in Batch.objects]
    return jsonify({"success": True, "batches": batches}), 200


@courses_bp.route("/months", methods=["GET"])
def get_all_months():
    months = [m.to_dict() for m in Month.objects]
    return jsonify({"success": True, "months": months}), 200
