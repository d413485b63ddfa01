from datetime import datetime

from mongoengine import StringField, FloatField, DictField, ValidationError

from course_admin.models.base import TimestampedDocument, iso

EMAIL_PATTERN = r"^[\w.+-]+@[\w-]+(\.[\w-]+)*\.\w{2,}$"
CONTACT_PATTERN = r"^([0-9]{10})?$"

# free-text labels a student gets when none are supplied
DEFAULT_LABELS = {
    "course": "networking",
    "month": "January",
    "batch": "Batch 1",
}


def current_year_label():
    return str(datetime.now().year)


class Student(TimestampedDocument):
    first_name = StringField(db_field="firstName", required=True, min_length=2)
    last_name = StringField(db_field="lastName", required=True, min_length=2)
    # not unique on its own, only together with the names
    email = StringField(required=True, regex=EMAIL_PATTERN,
                        unique_with=("first_name", "last_name"))
    college = StringField(default="")
    department = StringField(default="")
    contact_number = StringField(db_field="contactNumber", default="", regex=CONTACT_PATTERN)
    fees = FloatField(default=0, min_value=0)
    address = StringField(default="")

    # Denormalized labels; never synced with the Batch/Month/Year references
    batch = StringField(default=DEFAULT_LABELS["batch"])
    course = StringField(default=DEFAULT_LABELS["course"])
    month = StringField(default=DEFAULT_LABELS["month"])
    year = StringField(default=current_year_label)

    additional_details = DictField(db_field="additionalDetails")

    meta = {"collection": "Students"}

    # camelCase request keys -> attribute names
    FIELD_MAP = {
        "firstName": "first_name",
        "lastName": "last_name",
        "email": "email",
        "college": "college",
        "department": "department",
        "contactNumber": "contact_number",
        "fees": "fees",
        "address": "address",
        "course": "course",
        "month": "month",
        "year": "year",
        "batch": "batch",
        "additionalDetails": "additional_details",
    }

    def clean(self):
        for attr in ("first_name", "last_name", "college", "department",
                     "contact_number", "address", "batch", "course", "month", "year"):
            value = getattr(self, attr)
            if isinstance(value, str):
                setattr(self, attr, value.strip())
        if self.email:
            self.email = self.email.strip().lower()

    def apply(self, data):
        """Copy known camelCase keys from a request body onto the document."""
        for key, attr in self.FIELD_MAP.items():
            if key not in data:
                continue
            value = data[key]
            if attr == "fees":
                value = parse_fees(value)
            elif attr == "additional_details":
                if not isinstance(value, dict):
                    raise ValidationError("additionalDetails must be an object")
            elif value is None:
                value = ""
            else:
                value = str(value)
            setattr(self, attr, value)
        return self

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}"

    def to_dict(self):
        return {
            "_id": str(self.pk),
            "firstName": self.first_name,
            "lastName": self.last_name,
            "email": self.email,
            "college": self.college,
            "department": self.department,
            "contactNumber": self.contact_number,
            "fees": self.fees,
            "address": self.address,
            "course": self.course,
            "month": self.month,
            "batch": self.batch,
            "year": self.year,
            "additionalDetails": self.additional_details or {},
            "createdAt": iso(self.created_at),
            "updatedAt": iso(self.updated_at),
        }

    def summary(self):
        return {
            "_id": str(self.pk),
            "firstName": self.first_name,
            "lastName": self.last_name,
            "email": self.email,
        }


def parse_fees(value):
    if value in (None, ""):
        return 0
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{value} is not a valid fees amount")
