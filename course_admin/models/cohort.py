from mongoengine import (
    StringField, IntField, DictField, ListField, ReferenceField, LazyReferenceField,
)

from course_admin.models.base import TimestampedDocument, iso, ref_id


class CohortSummary(TimestampedDocument):
    """Aggregate of the students in one (course, year, month, batch) cohort."""

    course = ReferenceField("Course", required=True)
    year = StringField(required=True)
    month = ReferenceField("Month", required=True)
    batch = ReferenceField("Batch", required=True, unique_with=("course", "year", "month"))
    students = ListField(LazyReferenceField("Student"))
    # cached len(students), recomputed on every membership change
    total_students = IntField(db_field="totalStudents", default=0)
    metadata = DictField()

    meta = {"collection": "CourseYearMonthBatches"}

    def member_ids(self):
        return [ref.pk for ref in self.students]

    def has_member(self, student):
        return student.pk in self.member_ids()

    def add_member(self, student):
        if not self.has_member(student):
            self.students.append(student)
        self.total_students = len(self.students)

    def to_dict(self, students=None):
        raw = self.to_mongo()
        data = {
            "_id": str(self.pk),
            "course": self.metadata.get("courseName") or ref_id(raw.get("course")),
            "year": self.year,
            "month": self.metadata.get("monthName") or ref_id(raw.get("month")),
            "batch": self.metadata.get("batchName") or ref_id(raw.get("batch")),
            "totalStudents": self.total_students,
            "createdAt": iso(self.created_at),
            "updatedAt": iso(self.updated_at),
        }
        if students is not None:
            data["students"] = students
        return data
