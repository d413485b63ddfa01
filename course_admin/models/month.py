from mongoengine import StringField, ListField, ReferenceField, LazyReferenceField

from course_admin.models.base import TimestampedDocument, iso, ref_id


class Month(TimestampedDocument):
    name = StringField(required=True, unique_with=("year", "course"))
    year = ReferenceField("Year", required=True)
    course = ReferenceField("Course", required=True)
    batches = ListField(LazyReferenceField("Batch"))
    students = ListField(LazyReferenceField("Student"))

    meta = {"collection": "Months"}

    def to_dict(self):
        raw = self.to_mongo()
        return {
            "_id": str(self.pk),
            "name": self.name,
            "year": ref_id(raw.get("year")),
            "course": ref_id(raw.get("course")),
            "batches": [ref_id(b) for b in self.batches],
            "students": [ref_id(s) for s in self.students],
            "createdAt": iso(self.created_at),
            "updatedAt": iso(self.updated_at),
        }
