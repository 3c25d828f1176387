"""Students are held on the profile form until a profile exists."""
from django.core.files.uploadedfile import SimpleUploadedFile

from backend.client import BackendError

from .conftest import MODEL_BACKEND, PROFILE_WIRE

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


def _form_data(**overrides):
    data = {
        "name": "Asha Rao",
        "age": "14",
        "class_name": "9",
        "school": "City High",
        "batch": "Batch 1",
        "tuition_center": "Main Street",
        "parent_mobile_number": "555-0100",
        "date_of_birth": "2011-05-01",
        "profile_photo": SimpleUploadedFile("me.png", PNG, content_type="image/png"),
    }
    data.update(overrides)
    return data


def _new_student(client, user, fake_backend):
    store = {}
    fake_backend.responses["getCallerRole"] = "Student"
    fake_backend.responses["getCallerStudentProfile"] = lambda: store.get("profile")
    fake_backend.responses["createStudentProfile"] = lambda wire: store.update(profile=wire)
    client.force_login(user, backend=MODEL_BACKEND)
    return store


def test_student_without_profile_is_redirected_to_setup(client, student_user, fake_backend):
    _new_student(client, student_user, fake_backend)
    for path in ("/", "/student/", "/student/?tab=results"):
        response = client.get(path)
        assert response.status_code == 302
        assert response["Location"] == "/student/profile/setup/"
    assert client.get("/student/profile/setup/").status_code == 200


def test_completed_setup_releases_the_gate(client, student_user, fake_backend):
    store = _new_student(client, student_user, fake_backend)
    assert client.get("/student/").status_code == 302

    response = client.post("/student/profile/setup/", _form_data())

    assert response.status_code == 302
    assert response["Location"] == "/student/"
    assert store["profile"]["name"] == "Asha Rao"
    assert store["profile"]["batch"] == "Batch 1"
    assert store["profile"]["dateOfBirth"] == "2011-05-01"
    assert client.get("/student/").status_code == 200


def test_setup_requires_a_photo(client, student_user, fake_backend):
    store = _new_student(client, student_user, fake_backend)
    data = _form_data()
    del data["profile_photo"]
    response = client.post("/student/profile/setup/", data)
    assert response.status_code == 200
    assert "profile" not in store
    assert not fake_backend.called("createStudentProfile")


def test_setup_rejects_non_image_upload(client, student_user, fake_backend):
    store = _new_student(client, student_user, fake_backend)
    upload = SimpleUploadedFile("notes.txt", b"hello", content_type="text/plain")
    response = client.post("/student/profile/setup/", _form_data(profile_photo=upload))
    assert response.status_code == 200
    assert "profile" not in store


def test_setup_rejects_svg_and_mislabelled_uploads(client, student_user, fake_backend):
    store = _new_student(client, student_user, fake_backend)
    svg = b'<svg xmlns="http://www.w3.org/2000/svg"><script>alert(1)</script></svg>'
    for upload in (
        SimpleUploadedFile("x.svg", svg, content_type="image/svg+xml"),
        SimpleUploadedFile("x.png", svg, content_type="image/png"),
    ):
        response = client.post("/student/profile/setup/", _form_data(profile_photo=upload))
        assert response.status_code == 200
        assert "profile" not in store
    assert not fake_backend.called("createStudentProfile")


def test_setup_rejects_unknown_batch(client, student_user, fake_backend):
    store = _new_student(client, student_user, fake_backend)
    response = client.post("/student/profile/setup/", _form_data(batch="Batch 9"))
    assert response.status_code == 200
    assert "profile" not in store


def test_failed_profile_lookup_lets_request_through(client, student_user, fake_backend):
    fake_backend.responses["getCallerRole"] = "Student"
    fake_backend.responses["getCallerStudentProfile"] = BackendError("getCallerStudentProfile", "down")
    client.force_login(student_user, backend=MODEL_BACKEND)
    response = client.get("/student/")
    assert response.status_code == 200


def test_admins_are_not_gated(admin_client, fake_backend):
    fake_backend.responses["getCallerStudentProfile"] = None
    assert admin_client.get("/admin/").status_code == 200


def test_existing_profile_skips_setup_form(student_client):
    response = student_client.get("/student/profile/setup/")
    assert response.status_code == 302
    assert response["Location"] == "/student/"


def test_profile_page_shows_details(student_client):
    response = student_client.get("/student/profile/")
    assert response.status_code == 200
    assert PROFILE_WIRE["school"].encode() in response.content
