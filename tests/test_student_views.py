from attendance.dates import day_to_time

from .conftest import COURSE_WIRE


def test_enrollments_tab_lists_course_states(student_client, fake_backend):
    fake_backend.responses["getCoursesWithEnrollmentStatus"] = {
        "courses": [COURSE_WIRE, dict(COURSE_WIRE, id=2, title="Science")],
        "activeEnrollments": [],
        "expiredEnrollments": [2],
        "enrollmentRequests": [],
    }
    response = student_client.get("/student/?tab=enrollments")
    assert response.status_code == 200
    states = [(c.title, s.label, s.action) for c, s in response.context["course_states"]]
    assert states == [("Mathematics", "Not Enrolled", "enroll"), ("Science", "Expired", "renew")]
    assert response.context["validity_days"] == 30
    assert b"Request Renewal" in response.content


def test_request_enrollment_refreshes_status(student_client, fake_backend):
    fake_backend.responses["getCoursesWithEnrollmentStatus"] = {"courses": [COURSE_WIRE]}
    student_client.get("/student/?tab=enrollments")

    response = student_client.post("/student/enrollments/1/request/")

    assert response.status_code == 302
    assert response["Location"] == "/student/?tab=enrollments"
    [(_, args, _)] = fake_backend.called("requestEnrollment")
    assert args == (1,)
    student_client.get("/student/?tab=enrollments")
    assert len(fake_backend.called("getCoursesWithEnrollmentStatus")) == 2


def test_request_enrollment_requires_post(student_client):
    assert student_client.get("/student/enrollments/1/request/").status_code == 405


def test_attendance_tab_is_read_only(student_client, fake_backend):
    fake_backend.responses["getCallerAttendance"] = [
        {"date": day_to_time(2024, 3, 5), "status": "present"},
    ]
    response = student_client.get("/student/?tab=attendance&year=2024&month=3")
    cal = response.context["calendar"]
    assert cal["month_label"] == "March 2024"
    assert cal["summary"]["present"] == 1
    assert b'name="day"' not in response.content


def test_results_tab(student_client, fake_backend, student_user):
    fake_backend.responses["getAllCourses"] = [COURSE_WIRE]
    fake_backend.responses["getResultsByStudent"] = {
        "testResults": [
            {"id": 1, "student": student_user.principal, "courseId": 1, "score": 88,
             "grade": "A", "pass": True, "feedback": "Well done", "date": day_to_time(2024, 3, 5)},
        ],
        "dailyResults": [],
    }
    response = student_client.get("/student/?tab=results")
    assert response.context["has_results"] is True
    [row] = response.context["test_rows"]
    assert row["course"] == "Mathematics"
    assert row["result"].passed is True
    assert b"Mar 05, 2024" in response.content


def test_announcements_newest_first(student_client, fake_backend):
    fake_backend.responses["getAllAnnouncements"] = [
        {"id": 1, "title": "Old", "date": "2024-01-01", "message": "a"},
        {"id": 2, "title": "New", "date": "2024-03-01", "message": "b"},
    ]
    response = student_client.get("/student/?tab=announcements")
    assert [a.title for a in response.context["announcements"]] == ["New", "Old"]


def test_own_photo_served_from_profile_bytes(client, student_user, fake_backend):
    from .conftest import MODEL_BACKEND, PROFILE_WIRE

    fake_backend.responses["getCallerRole"] = "Student"
    fake_backend.responses["getCallerStudentProfile"] = dict(PROFILE_WIRE, profilePhoto="iVBORw0KGgo=")
    client.force_login(student_user, backend=MODEL_BACKEND)
    response = client.get("/student/profile/photo/")
    assert response.status_code == 200
    assert response["Content-Type"] == "image/png"
    assert response.content == b"\x89PNG\r\n\x1a\n"
