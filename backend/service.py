"""One function per backend operation.

Queries read through the query cache and fall back to a default value while
the backend connection is not configured. Mutations go straight to the
backend and invalidate the cached queries they affect once they succeed.
"""
import logging

from .cache import query_cache
from .client import call, is_ready
from .types import (
    Announcement,
    AttendanceEntry,
    AttendanceStatus,
    ContactDetails,
    Course,
    CoursesWithEnrollmentStatus,
    EnrollmentRequest,
    Principal,
    StudentProfile,
    StudentResults,
    UserRole,
    decode_bytes,
    encode_bytes,
)

logger = logging.getLogger(__name__)


def _query(key, method, *args, caller=None, decode=None, default=None):
    if not is_ready():
        logger.debug("Backend not ready; %s answered with default", method)
        return default() if callable(default) else default

    def load():
        raw = call(method, *args, caller=caller)
        return decode(raw) if decode else raw

    return query_cache.fetch(key, load)


def _mutate(method, *args, caller=None, invalidates=()):
    result = call(method, *args, caller=caller)
    for key in invalidates:
        query_cache.invalidate(*key)
    return result


def _list_of(cls):
    def decode(raw):
        return [cls.from_wire(item) for item in raw or []]
    return decode


def _optional(cls):
    def decode(raw):
        return cls.from_wire(raw) if raw else None
    return decode


# Profiles

def get_caller_student_profile(caller):
    caller = Principal(caller)
    return _query(
        ("studentProfile", caller),
        "getCallerStudentProfile",
        caller=caller,
        decode=_optional(StudentProfile),
    )


def create_student_profile(caller, profile: StudentProfile):
    caller = Principal(caller)
    return _mutate(
        "createStudentProfile",
        profile.to_wire(),
        caller=caller,
        invalidates=[("studentProfile", caller), ("allStudentProfiles",)],
    )


def get_student_profile(caller, student):
    student = Principal(student)
    return _query(
        ("studentProfile", student),
        "getStudentProfile",
        str(student),
        caller=Principal(caller),
        decode=_optional(StudentProfile),
    )


def update_student_profile(caller, student, profile: StudentProfile):
    student = Principal(student)
    return _mutate(
        "updateStudentProfile",
        str(student),
        profile.to_wire(),
        caller=Principal(caller),
        invalidates=[("studentProfile", student), ("allStudentProfiles",)],
    )


def get_all_student_profiles(caller):
    def decode(raw):
        return [
            (Principal(principal), StudentProfile.from_wire(profile))
            for principal, profile in raw or []
        ]

    return _query(
        ("allStudentProfiles",),
        "getAllStudentProfiles",
        caller=Principal(caller),
        decode=decode,
        default=list,
    )


# Roles

def get_caller_role(caller):
    caller = Principal(caller)
    return _query(("callerRole", caller), "getCallerRole", caller=caller)


def get_user_role(caller, user):
    user = Principal(user)
    return _query(("userRole", user), "getUserRole", str(user), caller=Principal(caller))


def assign_caller_user_role(caller, user, role: UserRole):
    user = Principal(user)
    return _mutate(
        "assignCallerUserRole",
        str(user),
        UserRole(role).value,
        caller=Principal(caller),
        invalidates=[
            ("callerRole", user),
            ("userRole", user),
        ],
    )


# Courses

def get_all_courses(caller=None):
    return _query(
        ("courses",),
        "getAllCourses",
        caller=caller,
        decode=_list_of(Course),
        default=list,
    )


def get_course(caller, course_id: int):
    return _query(
        ("course", int(course_id)),
        "getCourse",
        int(course_id),
        caller=Principal(caller),
        decode=_optional(Course),
    )


def create_course(caller, title, description, instructor, schedule, monthly_fee):
    return _mutate(
        "createCourse",
        title,
        description,
        instructor,
        schedule,
        int(monthly_fee),
        caller=Principal(caller),
        invalidates=[("courses",), ("coursesWithEnrollmentStatus",)],
    )


def update_course(caller, course_id, title, description, instructor, schedule, monthly_fee):
    return _mutate(
        "updateCourse",
        int(course_id),
        title,
        description,
        instructor,
        schedule,
        int(monthly_fee),
        caller=Principal(caller),
        invalidates=[
            ("courses",),
            ("course", int(course_id)),
            ("coursesWithEnrollmentStatus",),
        ],
    )


def delete_course(caller, course_id):
    return _mutate(
        "deleteCourse",
        int(course_id),
        caller=Principal(caller),
        invalidates=[
            ("courses",),
            ("course", int(course_id)),
            ("coursesWithEnrollmentStatus",),
        ],
    )


# Announcements

def get_all_announcements(caller=None):
    return _query(
        ("announcements",),
        "getAllAnnouncements",
        caller=caller,
        decode=_list_of(Announcement),
        default=list,
    )


def create_announcement(caller, title, message, date):
    return _mutate(
        "createAnnouncement",
        title,
        message,
        date,
        caller=Principal(caller),
        invalidates=[("announcements",)],
    )


def update_announcement(caller, announcement_id, title, message, date):
    return _mutate(
        "updateAnnouncement",
        int(announcement_id),
        title,
        message,
        date,
        caller=Principal(caller),
        invalidates=[("announcements",)],
    )


def delete_announcement(caller, announcement_id):
    return _mutate(
        "deleteAnnouncement",
        int(announcement_id),
        caller=Principal(caller),
        invalidates=[("announcements",)],
    )


# Enrollment

def _enrollment_keys(student, course_id):
    return [
        ("coursesWithEnrollmentStatus", Principal(student)),
        ("enrollmentsByUser", Principal(student)),
        ("enrollmentsByCourse", int(course_id)),
    ]


def get_courses_with_enrollment_status(caller):
    caller = Principal(caller)
    return _query(
        ("coursesWithEnrollmentStatus", caller),
        "getCoursesWithEnrollmentStatus",
        caller=caller,
        decode=CoursesWithEnrollmentStatus.from_wire,
        default=CoursesWithEnrollmentStatus,
    )


def request_enrollment(caller, course_id):
    return _mutate(
        "requestEnrollment",
        int(course_id),
        caller=Principal(caller),
        invalidates=_enrollment_keys(caller, course_id),
    )


def request_renewal(caller, course_id):
    return _mutate(
        "requestRenewal",
        int(course_id),
        caller=Principal(caller),
        invalidates=_enrollment_keys(caller, course_id),
    )


def approve_enrollment(caller, student, course_id):
    return _mutate(
        "approveEnrollment",
        str(student),
        int(course_id),
        caller=Principal(caller),
        invalidates=_enrollment_keys(student, course_id),
    )


def reject_enrollment(caller, student, course_id):
    return _mutate(
        "rejectEnrollment",
        str(student),
        int(course_id),
        caller=Principal(caller),
        invalidates=_enrollment_keys(student, course_id),
    )


def approve_renewal(caller, student, course_id):
    return _mutate(
        "approveRenewal",
        str(student),
        int(course_id),
        caller=Principal(caller),
        invalidates=_enrollment_keys(student, course_id),
    )


def renew_enrollment(caller, student, course_id):
    return _mutate(
        "renewEnrollment",
        str(student),
        int(course_id),
        caller=Principal(caller),
        invalidates=_enrollment_keys(student, course_id),
    )


def get_enrollments_by_user(caller, student):
    student = Principal(student)
    return _query(
        ("enrollmentsByUser", student),
        "getEnrollmentsByUser",
        str(student),
        caller=Principal(caller),
        decode=_list_of(EnrollmentRequest),
        default=list,
    )


def get_enrollments_by_course(caller, course_id):
    return _query(
        ("enrollmentsByCourse", int(course_id)),
        "getEnrollmentsByCourse",
        int(course_id),
        caller=Principal(caller),
        decode=_list_of(EnrollmentRequest),
        default=list,
    )


# Results

def create_test_result(caller, student, course_id, score, grade, passed, feedback, date):
    return _mutate(
        "createTestResult",
        str(student),
        int(course_id),
        int(score),
        grade,
        bool(passed),
        feedback,
        int(date),
        caller=Principal(caller),
        invalidates=[("resultsByStudent", Principal(student))],
    )


def post_daily_result(caller, student, course_id, date, result_type, score, remarks):
    return _mutate(
        "postDailyResult",
        str(student),
        int(course_id),
        int(date),
        result_type,
        int(score),
        remarks,
        caller=Principal(caller),
        invalidates=[("resultsByStudent", Principal(student))],
    )


def get_results_by_student(caller, student):
    student = Principal(student)
    return _query(
        ("resultsByStudent", student),
        "getResultsByStudent",
        str(student),
        caller=Principal(caller),
        decode=StudentResults.from_wire,
        default=StudentResults,
    )


# Attendance

def mark_attendance(caller, student, date, status: AttendanceStatus):
    student = Principal(student)
    return _mutate(
        "markAttendance",
        str(student),
        int(date),
        AttendanceStatus(status).value,
        caller=Principal(caller),
        invalidates=[("studentAttendance", student)],
    )


def get_student_attendance(caller, student):
    student = Principal(student)
    return _query(
        ("studentAttendance", student),
        "getStudentAttendance",
        str(student),
        caller=Principal(caller),
        decode=_list_of(AttendanceEntry),
        default=list,
    )


def get_caller_attendance(caller):
    caller = Principal(caller)
    return _query(
        ("studentAttendance", caller),
        "getCallerAttendance",
        caller=caller,
        decode=_list_of(AttendanceEntry),
        default=list,
    )


# Site settings

def get_contact_details(caller=None):
    return _query(
        ("contactDetails",),
        "getContactDetails",
        caller=caller,
        decode=_optional(ContactDetails),
    )


def update_contact_details(caller, email, phone, address):
    return _mutate(
        "updateContactDetails",
        email,
        phone,
        address,
        caller=Principal(caller),
        invalidates=[("contactDetails",)],
    )


def get_logo(caller=None):
    return _query(
        ("siteLogo",),
        "getLogo",
        caller=caller,
        decode=decode_bytes,
        default=bytes,
    )


def update_logo(caller, logo: bytes):
    return _mutate(
        "updateLogo",
        encode_bytes(logo),
        caller=Principal(caller),
        invalidates=[("siteLogo",)],
    )
