from flask import Blueprint, request, jsonify

from course_admin import taxonomy
from course_admin.models import Course, Year
from course_admin.utils import get_json_body, clean_token, require_fields, to_object_id

years_bp = Blueprint("years_bp", __name__, url_prefix="/api/years")


@years_bp.route("", methods=["GET"])
def get_years():
    course_id = clean_token(request.args.get("courseId"))

    query = Year.objects
    if course_id:
        query = query(course=to_object_id(course_id, "course ID"))
    years = list(query.order_by("year"))

    # populate course names with a single lookup
    course_ids = {y.to_mongo().get("course") for y in years}
    names = {c.pk: c.name for c in Course.objects(id__in=list(course_ids)).only("name")}

    return jsonify({
        "success": True,
        "message": "Years retrieved successfully",
        "years": [y.to_dict(course_name=names.get(y.to_mongo().get("course"))) for y in years],
    }), 200


@years_bp.route("", methods=["POST"])
def create_year():
    data = get_json_body()
    require_fields(data, "year", "courseId", message="Year and Course are required",
                   labels={"year": "Year", "courseId": "Course"})

    course = taxonomy.get_course(data["courseId"])
    year = taxonomy.add_year(course, data["year"], clean_token(data.get("description")))
    return jsonify({"success": True, "message": "Year created successfully", "year": year.to_dict()}), 201
