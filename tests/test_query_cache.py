"""Read-through query cache and its invalidation rules."""
from backend.cache import QueryCache
from backend.types import Principal


def _loader(value, calls):
    def load():
        calls.append(value)
        return value
    return load


def test_fetch_loads_once_then_hits():
    qc = QueryCache()
    calls = []
    assert qc.fetch(("courses",), _loader([1], calls)) == [1]
    assert qc.fetch(("courses",), _loader([2], calls)) == [1]
    assert calls == [[1]]


def test_get_reports_miss_and_cached_none():
    qc = QueryCache()
    assert qc.get(("studentProfile", Principal("p1"))) == (False, None)
    qc.set(("studentProfile", Principal("p1")), None)
    assert qc.get(("studentProfile", Principal("p1"))) == (True, None)


def test_prefix_invalidation_drops_every_matching_key():
    qc = QueryCache()
    a = ("studentAttendance", Principal("a"))
    b = ("studentAttendance", Principal("b"))
    qc.set(a, "A")
    qc.set(b, "B")
    qc.set(("courses",), "C")

    qc.invalidate("studentAttendance")

    assert qc.get(a) == (False, None)
    assert qc.get(b) == (False, None)
    assert qc.get(("courses",)) == (True, "C")


def test_invalidating_one_student_leaves_others():
    qc = QueryCache()
    a = ("studentAttendance", Principal("a"))
    b = ("studentAttendance", Principal("b"))
    qc.set(a, "A")
    qc.set(b, "B")

    qc.invalidate("studentAttendance", Principal("a"))

    assert qc.get(a) == (False, None)
    assert qc.get(b) == (True, "B")


def test_clear_principal_drops_only_that_callers_entries():
    qc = QueryCache()
    mine = ("callerRole", Principal("me"))
    theirs = ("callerRole", Principal("you"))
    qc.set(mine, "Admin")
    qc.set(theirs, "Student")
    qc.set(("courses",), [])

    qc.clear_principal(Principal("me"))

    assert qc.get(mine) == (False, None)
    assert qc.get(theirs) == (True, "Student")
    assert qc.get(("courses",)) == (True, [])


def test_clear_drops_everything():
    qc = QueryCache()
    qc.set(("courses",), [])
    qc.set(("announcements",), [])
    qc.invalidate()
    assert qc.get(("courses",)) == (False, None)
    assert qc.get(("announcements",)) == (False, None)
