import pytest

from course_admin import resolver
from course_admin.errors import ReferenceNotFound, ValidationFailed
from tests.helpers import create_cohort, create_student


def test_course_resolves_by_id_name_and_fragment(client):
    refs = create_cohort(client, course="data science")

    assert str(resolver.resolve_course(refs["course"]).pk) == refs["course"]
    assert resolver.resolve_course("data science").name == "data science"
    assert resolver.resolve_course("SCIENCE").name == "data science"


def test_course_fragment_is_matched_literally(client):
    create_cohort(client, course="data science")

    with pytest.raises(ReferenceNotFound):
        resolver.resolve_course("data.*")


def test_course_miss_lists_available_courses(client):
    create_cohort(client, course="data science")

    with pytest.raises(ReferenceNotFound) as exc:
        resolver.resolve_course("networking")

    payload = exc.value.to_dict()
    assert payload["message"] == "Course not found"
    assert payload["searchedValue"] == "networking"
    assert [c["name"] for c in payload["availableCourses"]] == ["data science"]


def test_year_is_scoped_by_course(client):
    ds = create_cohort(client, course="data science", year="2025")
    web = create_cohort(client, course="web development", year="2025")

    course = resolver.resolve_course("web development")
    year = resolver.resolve_year("2025", course)
    assert str(year.pk) == web["year"] != ds["year"]


def test_year_miss_lists_years_of_the_course(client):
    refs = create_cohort(client, year="2025")
    course = resolver.resolve_course("data science")

    with pytest.raises(ReferenceNotFound) as exc:
        resolver.resolve_year("2030", course)

    payload = exc.value.to_dict()
    assert payload["courseId"] == refs["course"]
    assert payload["availableYears"] == [{"_id": refs["year"], "year": "2025"}]


def test_month_and_batch_are_scoped_by_parents(client):
    create_cohort(client, course="data science", year="2025", month="January", batch="Batch 1")
    other = create_cohort(client, course="data science", year="2026", month="January", batch="Batch 1")

    cohort = resolver.resolve_cohort("data science", "2026", "January", "Batch 1")
    assert str(cohort.month.pk) == other["month"]
    assert str(cohort.batch.pk) == other["batch"]
    assert cohort.names == ("data science", "2026", "January", "Batch 1")


def test_batch_miss_lists_siblings_in_scope(client):
    create_cohort(client, batch="Batch 1")
    create_cohort(client, year="2026", batch="Batch 2")

    with pytest.raises(ReferenceNotFound) as exc:
        resolver.resolve_cohort("data science", "2025", "January", "Batch 2")

    payload = exc.value.to_dict()
    assert payload["level"] == "batch"
    assert payload["year"] == "2025"
    assert [b["name"] for b in payload["availableBatches"]] == ["Batch 1"]


def test_tokens_may_be_ids(client):
    refs = create_cohort(client)

    cohort = resolver.resolve_cohort(refs["course"], refs["year"], refs["month"], refs["batch"])
    assert cohort.batch.name == "Batch 1"


def test_blank_token_is_a_validation_error(app):
    with pytest.raises(ValidationFailed):
        resolver.resolve_course("   ")


def test_malformed_student_id_is_rejected(app):
    with pytest.raises(ValidationFailed):
        resolver.resolve_student("not-an-id")


def test_student_resolves_by_id(client):
    student_id = create_student(client)
    assert resolver.resolve_student(student_id).email == "ada@example.com"
