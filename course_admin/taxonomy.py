"""Single-entity operations on the course -> year -> month -> batch tree and students."""
import logging

from course_admin.errors import Conflict, NotFound
from course_admin.models import Course, Year, Month, Batch, Student
from course_admin.utils import to_object_id, require_fields

logger = logging.getLogger(__name__)


def _get(document, object_id, label):
    oid = to_object_id(object_id, f"{label} ID")
    found = document.objects(id=oid).first()
    if found is None:
        raise NotFound(f"{label.capitalize()} not found", **{f"{label}Id": str(oid)})
    return found


def get_course(course_id):
    return _get(Course, course_id, "course")


def get_year(year_id):
    return _get(Year, year_id, "year")


def get_month(month_id):
    return _get(Month, month_id, "month")


def get_batch(batch_id):
    return _get(Batch, batch_id, "batch")


# ----------------- COURSES -----------------

def add_course(name, description):
    if Course.objects(name=name).first():
        raise Conflict("Course already exists", course=name)
    course = Course(name=name, description=description)
    course.save()
    logger.info("Created course %s", name)
    return course


def delete_course(course_id):
    """Delete only the course; its years, months and batches stay behind."""
    course = get_course(course_id)
    course.delete()
    logger.info("Deleted course %s (%s)", course.name, course.pk)
    return course


# ----------------- YEARS / MONTHS / BATCHES -----------------

def add_year(course, year_label, description=None):
    year_label = str(year_label).strip()
    if Year.objects(course=course, year=year_label).first():
        raise Conflict("Year already exists for this course", year=year_label, courseId=str(course.pk))

    year = Year(year=year_label, course=course, description=description or f"Academic year {year_label}")
    year.save()
    Course.objects(id=course.pk).update_one(add_to_set__years=year)
    return year


def add_month(year, name):
    name = str(name).strip()
    course = year.course
    if Month.objects(name=name, year=year, course=course).first():
        raise Conflict("Month already exists for this year", month=name, yearId=str(year.pk))

    month = Month(name=name, year=year, course=course)
    month.save()
    Year.objects(id=year.pk).update_one(add_to_set__months=month)
    return month


def add_batch(month, name, description=None):
    name = str(name).strip()
    course = month.course
    year = month.year
    if Batch.objects(name=name, course=course, year=year.year, month=month).first():
        raise Conflict("Batch already exists for this month", batch=name, monthId=str(month.pk))

    batch = Batch(name=name, course=course, year=year.year, month=month, description=description or "")
    batch.save()
    Month.objects(id=month.pk).update_one(add_to_set__batches=batch)
    Year.objects(id=year.pk).update_one(add_to_set__batches=batch)
    return batch


# ----------------- STUDENTS -----------------

def create_student(data):
    require_fields(data, "firstName", "lastName", "email")

    first_name = str(data["firstName"]).strip()
    last_name = str(data["lastName"]).strip()
    email = str(data["email"]).strip().lower()

    existing = Student.objects(first_name=first_name, last_name=last_name, email=email).first()
    if existing:
        raise Conflict(f"Student with email {email} already exists", studentId=str(existing.pk))

    student = Student().apply(data)
    student.save()
    logger.info("Created student %s <%s>", student.full_name, student.email)
    return student


def add_student_to_batch(batch, data):
    """Create a student labelled with the batch's hierarchy and link it in."""
    month = batch.month
    labels = {
        "course": batch.course.name,
        "year": batch.year,
        "month": month.name,
        "batch": batch.name,
    }
    student = create_student({**data, **labels})

    Batch.objects(id=batch.pk).update_one(add_to_set__students=student)
    Month.objects(id=month.pk).update_one(add_to_set__students=student)
    Year.objects(id=month.year.pk).update_one(add_to_set__students=student)
    return student


def find_student_by_email(email):
    return Student.objects(email=str(email).strip().lower()).first()


def update_student_by_email(email, data):
    student = find_student_by_email(email)
    if student is None:
        raise NotFound("Student not found", email=email)
    student.apply(data)
    student.save()
    return student


def delete_student(student_id):
    oid = to_object_id(student_id, "student ID")
    student = Student.objects(id=oid).first()
    if student is None:
        raise NotFound("Student not found", studentId=str(student_id))
    student.delete()
    return student
