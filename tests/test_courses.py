def test_lecturer_creates_course_they_own(client, make_user, make_course):
    headers, lecturer = make_user("lecturer")

    course = make_course(headers, credits=4)

    assert course["course_code"] == "CSC101"
    assert course["credits"] == 4
    assert course["lecturer"]["id"] == lecturer["id"]
    assert course["schedule"][0]["day"] == "Monday"
    assert course["students"] == []


def test_duplicate_course_code_conflicts(client, make_user, make_course):
    headers, _ = make_user("lecturer")
    make_course(headers)

    response = client.post(
        "/courses",
        json={"course_code": "CSC101", "course_name": "Again", "department": "CS"},
        headers=headers,
    )

    assert response.status_code == 409


def test_schedule_entry_must_end_after_start(client, make_user):
    headers, _ = make_user("lecturer")

    response = client.post(
        "/courses",
        json={
            "course_code": "CSC102",
            "course_name": "Bad times",
            "department": "CS",
            "schedule": [
                {"day": "Friday", "start_time": "11:00", "end_time": "10:00", "venue": "LT2"}
            ],
        },
        headers=headers,
    )

    assert response.status_code == 422


def test_admin_must_name_a_lecturer(client, make_user, make_course):
    admin_headers, _ = make_user("admin")
    _, lecturer = make_user("lecturer")
    _, student = make_user("student")

    missing = client.post(
        "/courses",
        json={"course_code": "A1", "course_name": "A", "department": "CS"},
        headers=admin_headers,
    )
    not_a_lecturer = client.post(
        "/courses",
        json={
            "course_code": "A1",
            "course_name": "A",
            "department": "CS",
            "lecturer_id": student["id"],
        },
        headers=admin_headers,
    )
    course = make_course(admin_headers, code="A1", lecturer_id=lecturer["id"])

    assert missing.status_code == 400
    assert not_a_lecturer.status_code == 400
    assert course["lecturer"]["id"] == lecturer["id"]


def test_course_listing_is_scoped_by_role(client, make_user, make_course):
    lecturer_a, _ = make_user("lecturer")
    lecturer_b, _ = make_user("lecturer")
    admin, _ = make_user("admin")
    student_headers, student = make_user("student")
    course_a = make_course(lecturer_a, code="A100")
    make_course(lecturer_b, code="B100")
    client.post(
        f"/courses/{course_a['id']}/students",
        json={"student_ids": [student["id"]]},
        headers=lecturer_a,
    )

    def codes(headers):
        return [c["course_code"] for c in client.get("/courses", headers=headers).json()["courses"]]

    assert codes(lecturer_a) == ["A100"]
    assert codes(lecturer_b) == ["B100"]
    assert codes(student_headers) == ["A100"]
    assert codes(admin) == ["A100", "B100"]


def test_course_detail_access(client, make_user, make_course):
    owner, _ = make_user("lecturer")
    other, _ = make_user("lecturer")
    outsider, _ = make_user("student")
    course = make_course(owner)

    assert client.get(f"/courses/{course['id']}", headers=owner).status_code == 200
    assert client.get(f"/courses/{course['id']}", headers=other).status_code == 403
    assert client.get(f"/courses/{course['id']}", headers=outsider).status_code == 403
    assert client.get("/courses/999", headers=owner).status_code == 404


def test_enrollment_rules(client, make_user, make_course):
    owner, _ = make_user("lecturer")
    other, _ = make_user("lecturer")
    _, student = make_user("student")
    _, fellow_lecturer = make_user("lecturer")
    course = make_course(owner)
    url = f"/courses/{course['id']}/students"

    assert client.post(url, json={"student_ids": [student["id"]]}, headers=other).status_code == 403
    assert client.post(url, json={"student_ids": [fellow_lecturer["id"]]}, headers=owner).status_code == 400
    assert client.post(url, json={"student_ids": [4242]}, headers=owner).status_code == 404

    first = client.post(url, json={"student_ids": [student["id"]]}, headers=owner)
    again = client.post(url, json={"student_ids": [student["id"]]}, headers=owner)

    assert first.status_code == 200
    assert [s["id"] for s in again.json()["course"]["students"]] == [student["id"]]


def test_unenroll_student(client, make_user, make_course):
    owner, _ = make_user("lecturer")
    _, student = make_user("student")
    course = make_course(owner)
    client.post(
        f"/courses/{course['id']}/students",
        json={"student_ids": [student["id"]]},
        headers=owner,
    )

    response = client.delete(f"/courses/{course['id']}/students/{student['id']}", headers=owner)
    again = client.delete(f"/courses/{course['id']}/students/{student['id']}", headers=owner)

    assert response.status_code == 200
    assert response.json()["course"]["students"] == []
    assert again.status_code == 404


def test_class_rep_is_added_and_enrolled(client, make_user, make_course):
    owner, _ = make_user("lecturer")
    _, rep = make_user("class_rep")
    _, student = make_user("student")
    course = make_course(owner)
    url = f"/courses/{course['id']}/class-reps"

    wrong_role = client.post(url, json={"user_id": student["id"]}, headers=owner)
    response = client.post(url, json={"user_id": rep["id"]}, headers=owner)

    assert wrong_role.status_code == 400
    assert response.status_code == 200
    body = response.json()["course"]
    assert [r["id"] for r in body["class_reps"]] == [rep["id"]]
    assert [s["id"] for s in body["students"]] == [rep["id"]]
