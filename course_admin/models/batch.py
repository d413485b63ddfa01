from mongoengine import StringField, ListField, ReferenceField, LazyReferenceField

from course_admin.models.base import TimestampedDocument, iso, ref_id


class Batch(TimestampedDocument):
    name = StringField(required=True, unique_with=("course", "year", "month"))
    course = ReferenceField("Course", required=True)
    # year label copied from the owning Year
    year = StringField(required=True)
    month = ReferenceField("Month", required=True)
    students = ListField(LazyReferenceField("Student"))
    description = StringField(default="")

    meta = {"collection": "Batches"}

    def to_dict(self):
        raw = self.to_mongo()
        return {
            "_id": str(self.pk),
            "name": self.name,
            "course": ref_id(raw.get("course")),
            "year": self.year,
            "month": ref_id(raw.get("month")),
            "students": [ref_id(s) for s in self.students],
            "description": self.description,
            "createdAt": iso(self.created_at),
            "updatedAt": iso(self.updated_at),
        }
