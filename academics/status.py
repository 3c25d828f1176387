from dataclasses import dataclass
from typing import List, Optional

from backend.types import CoursesWithEnrollmentStatus, EnrollmentRequest, EnrollmentStatus

ENROLL = "enroll"
RENEW = "renew"


@dataclass(frozen=True)
class EnrollmentState:
    label: str
    badge: str
    action: Optional[str] = None


ACTIVE = EnrollmentState("Active", "active")
EXPIRED = EnrollmentState("Expired", "expired", RENEW)
PENDING = EnrollmentState("Pending", "pending")
NOT_ENROLLED = EnrollmentState("Not Enrolled", "none", ENROLL)


def enrollment_status(course_id: int, overview: CoursesWithEnrollmentStatus) -> EnrollmentState:
    """Classify one course for the caller.

    The lists are checked in a fixed order (active, expired, pending), so a
    course id that shows up in more than one list takes the first match.
    """
    checks = (
        (overview.active_enrollments, ACTIVE),
        (overview.expired_enrollments, EXPIRED),
        (overview.enrollment_requests, PENDING),
    )
    for ids, state in checks:
        if int(course_id) in ids:
            return state
    return NOT_ENROLLED


def course_states(overview: CoursesWithEnrollmentStatus) -> List[tuple]:
    return [(course, enrollment_status(course.id, overview)) for course in overview.courses]


REQUEST_BADGES = {
    EnrollmentStatus.APPROVED: ("Active", "active"),
    EnrollmentStatus.PENDING: ("Pending", "pending"),
    EnrollmentStatus.REJECTED: ("Rejected", "rejected"),
    EnrollmentStatus.EXPIRED: ("Expired", "expired"),
}


def request_badge(request: EnrollmentRequest):
    return REQUEST_BADGES[request.status]


def request_actions(request: EnrollmentRequest) -> List[str]:
    """Admin actions offered for one enrollment request."""
    if request.status == EnrollmentStatus.PENDING:
        if request.renewal_request:
            return ["approve_renewal", "reject"]
        return ["approve", "reject"]
    if request.status == EnrollmentStatus.EXPIRED:
        return ["renew"]
    return []
