from academics.status import (
    ACTIVE,
    ENROLL,
    EXPIRED,
    NOT_ENROLLED,
    PENDING,
    RENEW,
    course_states,
    enrollment_status,
    request_actions,
    request_badge,
)
from backend.types import (
    Course,
    CoursesWithEnrollmentStatus,
    EnrollmentRequest,
    EnrollmentStatus,
    Principal,
)


def _overview(active=(), expired=(), pending=()):
    return CoursesWithEnrollmentStatus(
        courses=[Course(id=i, title=f"C{i}", instructor="", description="", schedule="") for i in (1, 2, 3, 4)],
        active_enrollments=list(active),
        expired_enrollments=list(expired),
        enrollment_requests=list(pending),
    )


def test_expired_only_course_offers_renewal():
    state = enrollment_status(7, _overview(expired=[7]))
    assert state is EXPIRED
    assert state.label == "Expired"
    assert state.action == RENEW


def test_unknown_course_is_not_enrolled():
    state = enrollment_status(7, _overview())
    assert state is NOT_ENROLLED
    assert state.label == "Not Enrolled"
    assert state.action == ENROLL


def test_precedence_active_over_expired_over_pending():
    overview = _overview(active=[1], expired=[1, 2], pending=[1, 2, 3])
    assert enrollment_status(1, overview) is ACTIVE
    assert enrollment_status(2, overview) is EXPIRED
    assert enrollment_status(3, overview) is PENDING
    assert ACTIVE.action is None
    assert PENDING.action is None


def test_course_states_cover_every_course():
    states = course_states(_overview(active=[1], pending=[3]))
    assert [(c.id, s.label) for c, s in states] == [
        (1, "Active"),
        (2, "Not Enrolled"),
        (3, "Pending"),
        (4, "Not Enrolled"),
    ]


def _request(status, renewal=False):
    return EnrollmentRequest(
        student=Principal("abc"),
        course_id=1,
        status=status,
        renewal_request=renewal,
        request_date=0,
    )


def test_admin_actions_for_requests():
    assert request_actions(_request(EnrollmentStatus.PENDING)) == ["approve", "reject"]
    assert request_actions(_request(EnrollmentStatus.PENDING, renewal=True)) == ["approve_renewal", "reject"]
    assert request_actions(_request(EnrollmentStatus.EXPIRED)) == ["renew"]
    assert request_actions(_request(EnrollmentStatus.APPROVED)) == []
    assert request_actions(_request(EnrollmentStatus.REJECTED)) == []


def test_request_badges():
    assert request_badge(_request(EnrollmentStatus.APPROVED)) == ("Active", "active")
    assert request_badge(_request(EnrollmentStatus.REJECTED)) == ("Rejected", "rejected")
