from course_admin.models import Course, Year, Month, Batch
from tests.helpers import create_cohort


def test_add_and_list_courses(client):
    res = client.post("/api/courses/add", json={"course": "data science", "description": "DS"})
    assert res.status_code == 201
    course = res.get_json()["course"]
    assert course["name"] == course["course"] == "data science"

    res = client.get("/api/courses")
    assert res.status_code == 200
    assert [c["name"] for c in res.get_json()["courses"]] == ["data science"]


def test_add_course_requires_name_and_description(client):
    res = client.post("/api/courses/add", json={"name": "data science"})
    assert res.status_code == 400
    assert Course.objects.count() == 0


def test_duplicate_course_conflicts(client):
    client.post("/api/courses/add", json={"name": "data science", "description": "DS"})
    res = client.post("/api/courses/add", json={"name": "data science", "description": "again"})

    assert res.status_code == 409
    assert Course.objects.count() == 1


def test_duplicate_year_conflicts_on_both_routes(client):
    refs = create_cohort(client)

    res = client.post(f"/api/courses/{refs['course']}/years/add", json={"year": "2025"})
    assert res.status_code == 409
    res = client.post("/api/years", json={"year": "2025", "courseId": refs["course"]})
    assert res.status_code == 409
    assert Year.objects.count() == 1


def test_duplicate_month_conflicts(client):
    refs = create_cohort(client)

    res = client.post(f"/api/years/{refs['year']}/months/add", json={"month": "January"})
    assert res.status_code == 409
    assert Month.objects.count() == 1


def test_duplicate_batch_conflicts(client):
    refs = create_cohort(client)

    res = client.post(f"/api/months/{refs['month']}/batches/add", json={"batch": "Batch 1"})
    assert res.status_code == 409
    assert Batch.objects.count() == 1


def test_children_are_linked_to_parents(client):
    refs = create_cohort(client)

    course = Course.objects.get(id=refs["course"])
    year = Year.objects.get(id=refs["year"])
    month = Month.objects.get(id=refs["month"])
    batch = Batch.objects.get(id=refs["batch"])

    assert [y.pk for y in course.years] == [year.pk]
    assert [m.pk for m in year.months] == [month.pk]
    assert [b.pk for b in month.batches] == [batch.pk]
    assert batch.year == "2025"
    assert month.course.pk == course.pk


def test_delete_course_leaves_children(client):
    refs = create_cohort(client)

    res = client.delete(f"/api/courses/delete/{refs['course']}")
    assert res.status_code == 200
    assert Course.objects.count() == 0
    assert Year.objects.count() == Month.objects.count() == Batch.objects.count() == 1


def test_delete_course_bad_ids(client):
    assert client.delete("/api/courses/delete/not-an-id").status_code == 400
    assert client.delete("/api/courses/delete/0123456789abcdef01234567").status_code == 404


def test_list_children(client):
    refs = create_cohort(client)

    years = client.get(f"/api/courses/{refs['course']}/years").get_json()["years"]
    assert [y["year"] for y in years] == ["2025"]
    months = client.get(f"/api/years/{refs['year']}/months").get_json()["months"]
    assert [m["name"] for m in months] == ["January"]
    batches = client.get(f"/api/months/{refs['month']}/batches").get_json()["batches"]
    assert [b["name"] for b in batches] == ["Batch 1"]

    assert len(client.get("/api/batches").get_json()["batches"]) == 1
    assert len(client.get("/api/months").get_json()["months"]) == 1


def test_missing_parent_is_not_found(client):
    res = client.get("/api/years/0123456789abcdef01234567/months")
    assert res.status_code == 404
    assert res.get_json()["message"] == "Year not found"


def test_years_endpoint_sorts_and_populates_course(client):
    refs = create_cohort(client, year="2026")
    client.post("/api/years", json={"year": "2024", "courseId": refs["course"]})

    res = client.get("/api/years", query_string={"courseId": refs["course"]})
    years = res.get_json()["years"]
    assert [y["year"] for y in years] == ["2024", "2026"]
    assert years[0]["course"] == {"_id": refs["course"], "name": "data science"}
    assert years[0]["description"] == "Academic year 2024"


def test_create_year_validation(client):
    res = client.post("/api/years", json={"year": "2025"})
    assert res.status_code == 400
    assert res.get_json()["errors"] == ["Course is required"]


def test_add_student_to_batch_uses_batch_labels(client):
    refs = create_cohort(client)

    res = client.post(f"/api/batches/{refs['batch']}/students/add",
                      json={"firstName": "Ada", "lastName": "Lovelace", "email": "ada@example.com",
                            "course": "ignored"})
    assert res.status_code == 201
    student = res.get_json()["student"]
    assert (student["course"], student["year"], student["month"], student["batch"]) == \
        ("data science", "2025", "January", "Batch 1")

    listed = client.get(f"/api/batches/{refs['batch']}/students").get_json()
    assert listed["count"] == 1
    assert listed["students"][0]["_id"] == student["_id"]
