from mongoengine import StringField, ListField, ReferenceField, LazyReferenceField

from course_admin.models.base import TimestampedDocument, iso, ref_id


class Year(TimestampedDocument):
    # a label, not necessarily numeric
    year = StringField(required=True, unique_with="course")
    course = ReferenceField("Course", required=True)
    description = StringField(default="")
    months = ListField(LazyReferenceField("Month"))
    batches = ListField(LazyReferenceField("Batch"))
    students = ListField(LazyReferenceField("Student"))

    meta = {"collection": "Years"}

    def to_dict(self, course_name=None):
        raw = self.to_mongo()
        data = {
            "_id": str(self.pk),
            "year": self.year,
            "course": ref_id(raw.get("course")),
            "description": self.description,
            "months": [ref_id(m) for m in self.months],
            "batches": [ref_id(b) for b in self.batches],
            "students": [ref_id(s) for s in self.students],
            "createdAt": iso(self.created_at),
            "updatedAt": iso(self.updated_at),
        }
        if course_name is not None:
            data["course"] = {"_id": data["course"], "name": course_name}
        return data
