"""API helpers shared by the test modules."""


def create_cohort(client, course="data science", year="2025", month="January", batch="Batch 1"):
    """Build course -> year -> month -> batch through the API and return their ids."""
    res = client.post("/api/courses/add", json={"name": course, "description": f"{course} course"})
    if res.status_code == 201:
        course_id = res.get_json()["course"]["_id"]
    else:
        course_id = next(c["_id"] for c in client.get("/api/courses").get_json()["courses"] if c["name"] == course)

    res = client.post(f"/api/courses/{course_id}/years/add", json={"year": year})
    assert res.status_code == 201, res.get_json()
    year_id = res.get_json()["year"]["_id"]

    res = client.post(f"/api/years/{year_id}/months/add", json={"month": month})
    assert res.status_code == 201, res.get_json()
    month_id = res.get_json()["month"]["_id"]

    res = client.post(f"/api/months/{month_id}/batches/add", json={"batch": batch})
    assert res.status_code == 201, res.get_json()
    batch_id = res.get_json()["batch"]["_id"]

    return {"course": course_id, "year": year_id, "month": month_id, "batch": batch_id}


def create_student(client, first="Ada", last="Lovelace", email="ada@example.com", **extra):
    res = client.post("/api/students/add", json={"firstName": first, "lastName": last, "email": email, **extra})
    assert res.status_code == 201, res.get_json()
    return res.get_json()["student"]["_id"]
