"""Resolve course/year/month/batch tokens (id, name or fragment) to stored records."""
import logging
from collections import namedtuple

from mongoengine.queryset.visitor import Q

from course_admin.errors import ReferenceNotFound, ValidationFailed
from course_admin.models import Course, Year, Month, Batch, Student
from course_admin.utils import is_object_id, to_object_id, clean_token

logger = logging.getLogger(__name__)


class Cohort(namedtuple("Cohort", "course year month batch")):
    """A fully resolved (course, year, month, batch) tuple."""

    __slots__ = ()

    @property
    def year_label(self):
        return self.year.year

    @property
    def names(self):
        return self.course.name, self.year.year, self.month.name, self.batch.name

    def to_dict(self):
        return {
            "course": {"id": str(self.course.pk), "name": self.course.name, "course": self.course.name},
            "year": {"id": str(self.year.pk), "year": self.year.year},
            "month": {"id": str(self.month.pk), "name": self.month.name},
            "batch": {"id": str(self.batch.pk), "name": self.batch.name},
        }


def _require(token, level):
    token = clean_token(token)
    if token is None:
        raise ValidationFailed(f"{level.capitalize()} is required", errors=[f"{level.capitalize()} is required"])
    return token


def _by_id_or(token, *alternatives):
    query = alternatives[0]
    for alt in alternatives[1:]:
        query = query | alt
    if is_object_id(token):
        query = Q(id=token) | query
    return query


def _miss(level, token, available, **scope):
    logger.warning("%s not found: %r (scope=%s)", level.capitalize(), token, scope)
    return ReferenceNotFound(level, token, available=available, scope=scope)


# ----------------- COURSE -----------------

def available_courses():
    return [{"_id": str(c.pk), "name": c.name, "course": c.name} for c in Course.objects.only("name")]


def resolve_course(token):
    token = _require(token, "course")
    query = _by_id_or(token, Q(name=token), Q(name__icontains=token))
    course = Course.objects(query).first()
    if course is None:
        raise _miss("course", token, available_courses())
    return course


# ----------------- YEAR -----------------

def _year_scope(course):
    return Year.objects(course=course) if course is not None else Year.objects


def available_years(course=None):
    return [{"_id": str(y.pk), "year": y.year} for y in _year_scope(course).only("year")]


def resolve_year(token, course=None):
    token = _require(token, "year")
    year = _year_scope(course).filter(_by_id_or(token, Q(year=token))).first()
    if year is None:
        scope = {"courseId": str(course.pk)} if course is not None else {}
        raise _miss("year", token, available_years(course), **scope)
    return year


# ----------------- MONTH -----------------

def _month_scope(course=None, year=None):
    filters = {}
    if course is not None:
        filters["course"] = course
    if year is not None:
        filters["year"] = year
    return Month.objects(**filters)


def available_months(course=None, year=None):
    return [
        {
            "_id": str(m.pk),
            "name": m.name,
            "course": course.name if course is not None else None,
            "year": year.year if year is not None else None,
        }
        for m in _month_scope(course, year).only("name")
    ]


def resolve_month(token, course=None, year=None):
    token = _require(token, "month")
    month = _month_scope(course, year).filter(_by_id_or(token, Q(name=token))).first()
    if month is None:
        scope = {}
        if course is not None:
            scope["courseId"] = str(course.pk)
        if year is not None:
            scope["yearId"] = str(year.pk)
        raise _miss("month", token, available_months(course, year), **scope)
    return month


# ----------------- BATCH -----------------

def _batch_scope(course=None, year_label=None, month=None):
    filters = {}
    if course is not None:
        filters["course"] = course
    if year_label is not None:
        filters["year"] = year_label
    if month is not None:
        filters["month"] = month
    return Batch.objects(**filters)


def available_batches(course=None, year_label=None, month=None):
    return [{"_id": str(b.pk), "name": b.name} for b in _batch_scope(course, year_label, month).only("name")]


def resolve_batch(token, course=None, year_label=None, month=None):
    token = _require(token, "batch")
    batch = _batch_scope(course, year_label, month).filter(_by_id_or(token, Q(name=token))).first()
    if batch is None:
        scope = {}
        if course is not None:
            scope["courseId"] = str(course.pk)
        if year_label is not None:
            scope["year"] = year_label
        if month is not None:
            scope["monthId"] = str(month.pk)
        raise _miss("batch", token, available_batches(course, year_label, month), **scope)
    return batch


# ----------------- STUDENT / COHORT -----------------

def resolve_student(student_id):
    student_id = to_object_id(_require(student_id, "student"), "student id")
    student = Student.objects(id=student_id).first()
    if student is None:
        logger.warning("Student not found: %s", student_id)
        raise ReferenceNotFound("student", str(student_id))
    return student


def resolve_cohort(course, year, month, batch):
    """Resolve all four levels top-down; the first miss aborts."""
    course_ref = resolve_course(course)
    year_ref = resolve_year(year, course_ref)
    month_ref = resolve_month(month, course_ref, year_ref)
    batch_ref = resolve_batch(batch, course_ref, year_ref.year, month_ref)
    return Cohort(course_ref, year_ref, month_ref, batch_ref)
