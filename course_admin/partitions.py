"""Per-cohort student partitions and cohort summaries."""
import logging
import re

from flask import current_app
from pymongo import ASCENDING
from pymongo.errors import CollectionInvalid

from course_admin.db import get_db
from course_admin.errors import AlreadyMember
from course_admin.models import CohortSummary, Student
from course_admin.models.base import utcnow
from course_admin.resolver import (
    resolve_cohort, resolve_student, resolve_course, resolve_year, resolve_month, resolve_batch,
)
from course_admin.utils import is_object_id, to_object_id, clean_token

logger = logging.getLogger(__name__)

SEPARATOR = "_"
SUFFIX = "stu-details"

_WHITESPACE = re.compile(r"\s+")
_NON_ALNUM = re.compile(r"[^a-z0-9]")


def canonicalize(value):
    value = _WHITESPACE.sub("", str(value).lower())
    return _NON_ALNUM.sub("", value)


def partition_name(course, year, month, batch):
    """e.g. ("Data Science", "2025", "January", "Batch 1") -> datascience_2025_january_batch1_stu-details"""
    parts = [canonicalize(part) for part in (course, year, month, batch)]
    return SEPARATOR.join(parts + [SUFFIX])


class CohortPartitionManager:
    """Owns the partition registry for one application process."""

    def __init__(self, db_getter=get_db):
        self._get_db = db_getter
        # partition name -> collection with its unique index ensured
        self._provisioned = {}

    @property
    def provisioned(self):
        return frozenset(self._provisioned)

    def collection(self, name):
        """Read handle; does not create anything."""
        collection = self._provisioned.get(name)
        if collection is None:
            collection = self._get_db()[name]
        return collection

    def provision(self, name):
        collection = self._provisioned.get(name)
        if collection is not None:
            return collection

        db = self._get_db()
        if name not in db.list_collection_names():
            try:
                db.create_collection(name)
                logger.info("📦 Created partition %s", name)
            except CollectionInvalid:
                logger.info("Partition %s was created concurrently, reusing it", name)

        collection = db[name]
        collection.create_index([("student", ASCENDING)], unique=True, name="student_unique")
        self._provisioned[name] = collection
        return collection

    # ----------------- WRITES -----------------

    def record_membership(self, course, year, month, batch, student_id, details=None):
        """Add a student to a cohort partition and to the cohort summary.

        Every reference is resolved before the first write, so a bad token
        leaves both the partition and the summary untouched. A student that
        already has a record in the partition raises ``AlreadyMember``.
        """
        student_oid = to_object_id(clean_token(student_id), "student id")
        cohort = resolve_cohort(course, year, month, batch)
        student = resolve_student(student_oid)

        name = partition_name(*cohort.names)
        collection = self.provision(name)

        if collection.find_one({"student": student.pk}) is not None:
            logger.warning("Student %s already in %s", student.pk, name)
            raise AlreadyMember(name, str(student.pk))

        entry_details = dict(details or {})
        entry_details["uniqueIdentifier"] = "-".join(
            str(part) for part in (student.pk, cohort.course.pk, cohort.year_label,
                                   cohort.month.pk, cohort.batch.pk)
        )
        now = utcnow()
        collection.insert_one({
            "student": student.pk,
            "course": cohort.course.pk,
            "year": cohort.year_label,
            "month": cohort.month.pk,
            "batch": cohort.batch.pk,
            "additionalDetails": entry_details,
            "createdAt": now,
            "updatedAt": now,
        })

        summary = self._add_to_summary(cohort, student, name)
        logger.info("Added %s to %s", student.full_name, name)
        return {"cohort": cohort, "student": student, "collectionName": name, "summary": summary}

    def _add_to_summary(self, cohort, student, name):
        summary = CohortSummary.objects(
            course=cohort.course, year=cohort.year_label, month=cohort.month, batch=cohort.batch
        ).first()
        if summary is None:
            summary = CohortSummary(
                course=cohort.course,
                year=cohort.year_label,
                month=cohort.month,
                batch=cohort.batch,
                students=[],
                metadata={
                    "courseName": cohort.course.name,
                    "monthName": cohort.month.name,
                    "batchName": cohort.batch.name,
                    "collectionName": name,
                },
            )
        summary.add_member(student)
        summary.save()
        return summary

    # ----------------- READS -----------------

    def list_members(self, course, year, month, batch):
        """Records of one partition joined with their Student documents."""
        cohort = resolve_cohort(course, year, month, batch)
        name = partition_name(*cohort.names)

        records = list(self.collection(name).find({
            "course": cohort.course.pk,
            "year": cohort.year_label,
            "month": cohort.month.pk,
            "batch": cohort.batch.pk,
        }))
        students = {s.pk: s for s in Student.objects(id__in=[r["student"] for r in records])}

        members = []
        for record in records:
            student = students.get(record["student"])
            if student is None:
                # the student was deleted after joining
                logger.warning("Skipping orphaned record %s in %s", record["_id"], name)
                continue
            members.append((record, student))
        return cohort, name, members

    def find_summaries(self, course=None, year=None, month=None, batch=None):
        """Summaries matching whichever tokens are given.

        A supplied token that does not resolve is an error; no matching
        summaries is an empty list.
        """
        course, year, month, batch = (clean_token(t) for t in (course, year, month, batch))
        filters = {}

        course_ref = resolve_course(course) if course else None
        if course_ref is not None:
            filters["course"] = course_ref

        year_ref = None
        if year:
            if course_ref is not None or is_object_id(year):
                year_ref = resolve_year(year, course_ref)
                filters["year"] = year_ref.year
                filters["course"] = year_ref.course
            else:
                # a bare label may span several courses
                filters["year"] = year

        month_ref = None
        if month:
            month_ref = resolve_month(month, course_ref, year_ref)
            filters["month"] = month_ref

        if batch:
            filters["batch"] = resolve_batch(batch, course_ref, filters.get("year"), month_ref)

        summaries = list(CohortSummary.objects(**filters))
        member_ids = {pk for summary in summaries for pk in summary.member_ids()}
        students = {s.pk: s for s in Student.objects(id__in=list(member_ids))}

        return [
            (summary, [students[pk] for pk in summary.member_ids() if pk in students])
            for summary in summaries
        ]


def init_partitions(app):
    app.extensions["cohort_partitions"] = CohortPartitionManager()
    return app.extensions["cohort_partitions"]


def get_partition_manager():
    return current_app.extensions["cohort_partitions"]
