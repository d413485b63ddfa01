from mongoengine import StringField, ListField, ReferenceField

from course_admin.models.base import TimestampedDocument, iso, ref_id


class Course(TimestampedDocument):
    name = StringField(required=True, unique=True)
    description = StringField(required=True)
    years = ListField(ReferenceField("Year"))

    meta = {"collection": "Course_details"}

    def to_dict(self):
        return {
            "_id": str(self.pk),
            "name": self.name,
            # older clients read the course name from "course"
            "course": self.name or "Unnamed Course",
            "description": self.description,
            "years": [ref_id(y) for y in self.to_mongo().get("years", [])],
            "createdAt": iso(self.created_at),
            "updatedAt": iso(self.updated_at),
        }
