"""Entities exchanged with the backend, and their JSON wire form.

Wire conventions: camelCase keys, times as integer nanoseconds since the
Unix epoch, byte blobs as base64 strings, optional values as null.
"""
from __future__ import annotations

import base64
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class Principal(str):
    """Opaque caller identifier issued by the identity layer."""


def _b64decode(value: Optional[str]) -> bytes:
    if not value:
        return b""
    return base64.b64decode(value)


def _b64encode(value: bytes) -> str:
    return base64.b64encode(value or b"").decode("ascii")


def decode_bytes(value: Any) -> bytes:
    return _b64decode(value)


def encode_bytes(value: bytes) -> str:
    return _b64encode(value)


class EnrollmentStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    EXPIRED = "expired"


class AttendanceStatus(str, Enum):
    PRESENT = "present"
    ABSENT = "absent"


class UserRole(str, Enum):
    ADMIN = "admin"
    USER = "user"
    GUEST = "guest"


@dataclass
class StudentProfile:
    name: str
    age: int
    class_name: str
    school: str
    batch: str
    tuition_center: str
    parent_mobile_number: str
    date_of_birth: str
    profile_photo: bytes = b""
    student_mobile_number: Optional[str] = None

    @classmethod
    def from_wire(cls, data: Dict[str, Any]) -> "StudentProfile":
        return cls(
            name=data.get("name", ""),
            age=int(data.get("age", 0)),
            class_name=data.get("className", ""),
            school=data.get("school", ""),
            batch=data.get("batch", ""),
            tuition_center=data.get("tuitionCenter", ""),
            parent_mobile_number=data.get("parentMobileNumber", ""),
            date_of_birth=data.get("dateOfBirth", ""),
            profile_photo=_b64decode(data.get("profilePhoto")),
            student_mobile_number=data.get("studentMobileNumber") or None,
        )

    def to_wire(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "age": self.age,
            "className": self.class_name,
            "school": self.school,
            "batch": self.batch,
            "tuitionCenter": self.tuition_center,
            "parentMobileNumber": self.parent_mobile_number,
            "dateOfBirth": self.date_of_birth,
            "profilePhoto": _b64encode(self.profile_photo),
            "studentMobileNumber": self.student_mobile_number,
        }

    @property
    def has_photo(self) -> bool:
        return bool(self.profile_photo)


@dataclass
class Course:
    id: int
    title: str
    instructor: str
    description: str
    schedule: str
    monthly_fee: int = 0

    @classmethod
    def from_wire(cls, data: Dict[str, Any]) -> "Course":
        return cls(
            id=int(data["id"]),
            title=data.get("title", ""),
            instructor=data.get("instructor", ""),
            description=data.get("description", ""),
            schedule=data.get("schedule", ""),
            monthly_fee=int(data.get("monthlyFee") or 0),
        )


@dataclass
class Announcement:
    id: int
    title: str
    date: str
    message: str

    @classmethod
    def from_wire(cls, data: Dict[str, Any]) -> "Announcement":
        return cls(
            id=int(data["id"]),
            title=data.get("title", ""),
            date=data.get("date", ""),
            message=data.get("message", ""),
        )


@dataclass
class EnrollmentRequest:
    student: Principal
    course_id: int
    status: EnrollmentStatus
    renewal_request: bool
    request_date: int
    approval_date: Optional[int] = None
    expiry_date: Optional[int] = None

    @classmethod
    def from_wire(cls, data: Dict[str, Any]) -> "EnrollmentRequest":
        return cls(
            student=Principal(data["student"]),
            course_id=int(data["courseId"]),
            status=EnrollmentStatus(data["status"]),
            renewal_request=bool(data.get("renewalRequest")),
            request_date=int(data.get("requestDate") or 0),
            approval_date=_optional_int(data.get("approvalDate")),
            expiry_date=_optional_int(data.get("expiryDate")),
        )


@dataclass
class TestResult:
    __test__ = False

    id: int
    student: Principal
    course_id: int
    score: int
    grade: str
    passed: bool
    feedback: str
    date: int

    @classmethod
    def from_wire(cls, data: Dict[str, Any]) -> "TestResult":
        return cls(
            id=int(data["id"]),
            student=Principal(data["student"]),
            course_id=int(data["courseId"]),
            score=int(data.get("score") or 0),
            grade=data.get("grade", ""),
            passed=bool(data.get("pass")),
            feedback=data.get("feedback", ""),
            date=int(data.get("date") or 0),
        )


@dataclass
class DailyResult:
    student: Principal
    course_id: int
    date: int
    result_type: str
    score: int
    remarks: str

    @classmethod
    def from_wire(cls, data: Dict[str, Any]) -> "DailyResult":
        return cls(
            student=Principal(data["student"]),
            course_id=int(data["courseId"]),
            date=int(data.get("date") or 0),
            result_type=data.get("resultType", ""),
            score=int(data.get("score") or 0),
            remarks=data.get("remarks", ""),
        )


@dataclass
class StudentResults:
    test_results: List[TestResult] = field(default_factory=list)
    daily_results: List[DailyResult] = field(default_factory=list)

    @classmethod
    def from_wire(cls, data: Dict[str, Any]) -> "StudentResults":
        data = data or {}
        return cls(
            test_results=[TestResult.from_wire(r) for r in data.get("testResults") or []],
            daily_results=[DailyResult.from_wire(r) for r in data.get("dailyResults") or []],
        )

    @property
    def is_empty(self) -> bool:
        return not self.test_results and not self.daily_results


@dataclass
class AttendanceEntry:
    date: int
    status: AttendanceStatus

    @classmethod
    def from_wire(cls, data: Dict[str, Any]) -> "AttendanceEntry":
        return cls(date=int(data["date"]), status=AttendanceStatus(data["status"]))


@dataclass
class ContactDetails:
    email: str
    phone: str
    address: str

    @classmethod
    def from_wire(cls, data) -> "ContactDetails":
        # The backend answers with an (email, phone, address) tuple.
        email, phone, address = data
        return cls(email=email or "", phone=phone or "", address=address or "")


@dataclass
class CoursesWithEnrollmentStatus:
    courses: List[Course] = field(default_factory=list)
    active_enrollments: List[int] = field(default_factory=list)
    expired_enrollments: List[int] = field(default_factory=list)
    enrollment_requests: List[int] = field(default_factory=list)

    @classmethod
    def from_wire(cls, data: Dict[str, Any]) -> "CoursesWithEnrollmentStatus":
        data = data or {}
        return cls(
            courses=[Course.from_wire(c) for c in data.get("courses") or []],
            active_enrollments=[int(i) for i in data.get("activeEnrollments") or []],
            expired_enrollments=[int(i) for i in data.get("expiredEnrollments") or []],
            enrollment_requests=[int(i) for i in data.get("enrollmentRequests") or []],
        )


def _optional_int(value) -> Optional[int]:
    if value is None:
        return None
    return int(value)
