from io import StringIO

from django.core.management import call_command

from backend.cache import query_cache
from backend.types import Principal


def test_clear_query_cache_for_one_user(student_user):
    mine = ("callerRole", Principal(student_user.principal))
    query_cache.set(mine, "Student")
    query_cache.set(("courses",), [])
    out = StringIO()

    call_command("clear_query_cache", "--email", "STUDENT@example.com", stdout=out)

    assert query_cache.get(mine) == (False, None)
    assert query_cache.get(("courses",)) == (True, [])
    assert "Cleared cached queries for" in out.getvalue()


def test_clear_query_cache_by_prefix(db):
    query_cache.set(("courses",), [])
    query_cache.set(("announcements",), [])
    call_command("clear_query_cache", "--prefix", "courses", stdout=StringIO())
    assert query_cache.get(("courses",)) == (False, None)
    assert query_cache.get(("announcements",)) == (True, [])


def test_clear_query_cache_unknown_user(db):
    out = StringIO()
    call_command("clear_query_cache", "--email", "nobody@example.com", stdout=out)
    assert "No user with email" in out.getvalue()
