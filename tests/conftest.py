import pytest
from django.core.cache import cache

from accounts.models import User

MODEL_BACKEND = "django.contrib.auth.backends.ModelBackend"

PROFILE_WIRE = {
    "name": "Asha Rao",
    "age": 14,
    "className": "9",
    "school": "City High",
    "batch": "Batch 1",
    "tuitionCenter": "Main Street",
    "parentMobileNumber": "555-0100",
    "dateOfBirth": "2011-05-01",
    "profilePhoto": None,
    "studentMobileNumber": None,
}

COURSE_WIRE = {
    "id": 1,
    "title": "Mathematics",
    "instructor": "Mr. Iyer",
    "description": "Algebra and geometry",
    "schedule": "Mon/Wed 5pm",
    "monthlyFee": 1200,
}


class FakeBackend:
    """Stands in for backend.client.call.

    `responses` maps an RPC method name to a value, a callable taking the
    call's arguments, or an exception instance to raise.
    """

    def __init__(self):
        self.responses = {}
        self.calls = []

    def __call__(self, method, *args, caller=None):
        self.calls.append((method, args, caller))
        result = self.responses.get(method)
        if isinstance(result, Exception):
            raise result
        if callable(result):
            return result(*args)
        return result

    def called(self, method):
        return [c for c in self.calls if c[0] == method]


@pytest.fixture(autouse=True)
def _clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def fake_backend(settings, monkeypatch):
    settings.BACKEND_URL = "http://backend.test"
    fake = FakeBackend()
    monkeypatch.setattr("backend.service.call", fake)
    return fake


@pytest.fixture
def student_user(db):
    return User.objects.create_user(email="student@example.com", password="s3cret-pass!")


@pytest.fixture
def admin_user(db):
    return User.objects.create_user(email="admin@example.com", password="s3cret-pass!")


@pytest.fixture
def student_client(client, student_user, fake_backend):
    fake_backend.responses["getCallerRole"] = "Student"
    fake_backend.responses["getCallerStudentProfile"] = dict(PROFILE_WIRE)
    client.force_login(student_user, backend=MODEL_BACKEND)
    return client


@pytest.fixture
def admin_client(client, admin_user, fake_backend):
    fake_backend.responses["getCallerRole"] = "Admin"
    client.force_login(admin_user, backend=MODEL_BACKEND)
    return client
