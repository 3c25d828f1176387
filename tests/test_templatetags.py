from attendance.dates import day_to_time
from backend.templatetags.portal import get_item, ns_date, ns_datetime


def test_ns_date_formats_nanoseconds():
    assert ns_date(day_to_time(2024, 3, 5)) == "Mar 05, 2024"
    assert ns_datetime(day_to_time(2024, 3, 5)) == "Mar 05, 2024 12:00"


def test_ns_date_blank_for_missing():
    assert ns_date(None) == ""
    assert ns_date("") == ""
    assert ns_date("soon") == ""


def test_get_item():
    assert get_item({"a": 1}, "a") == 1
    assert get_item(None, "a") is None
