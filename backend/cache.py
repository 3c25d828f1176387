import hashlib
import logging
import time

from django.conf import settings
from django.core.cache import caches

from .types import Principal

logger = logging.getLogger(__name__)

KEY_PREFIX = "q:v1"


def _digest(text: str) -> str:
    return hashlib.sha1(text.encode("utf-8")).hexdigest()


class QueryCache:
    """Read-through cache for backend queries.

    A key is a tuple of the operation name followed by its parameters, for
    example ("studentAttendance", principal). Invalidation works on key
    prefixes the way a query client does: invalidating ("studentAttendance",)
    drops the entries of every student. Keys that carry a Principal are also
    attached to that principal's scope, which sign-out clears.

    Invalidation bumps generation counters instead of deleting entries, so
    it works on any Django cache backend without listing keys.
    """

    def __init__(self, alias=None, ttl=None):
        self._alias = alias
        self._ttl = ttl

    @property
    def backend(self):
        return caches[self._alias or getattr(settings, "QUERY_CACHE_ALIAS", "default")]

    @property
    def ttl(self):
        if self._ttl is not None:
            return self._ttl
        return getattr(settings, "QUERY_CACHE_TTL_SECONDS", 60)

    def _prefix_gen_key(self, parts):
        return f"{KEY_PREFIX}:gen:p:{_digest(repr(parts))}"

    def _principal_gen_key(self, principal):
        return f"{KEY_PREFIX}:gen:u:{_digest(str(principal))}"

    def _global_gen_key(self):
        return f"{KEY_PREFIX}:gen:all"

    def _gen_keys(self, key):
        parts = tuple(str(p) for p in key)
        keys = [self._global_gen_key()]
        keys += [self._prefix_gen_key(parts[:i]) for i in range(1, len(parts) + 1)]
        keys += [self._principal_gen_key(p) for p in key if isinstance(p, Principal)]
        return keys

    def _storage_key(self, key):
        gen_keys = self._gen_keys(key)
        gens = self.backend.get_many(gen_keys)
        stamp = [gens.get(k, 0) for k in gen_keys]
        parts = tuple(str(p) for p in key)
        return f"{KEY_PREFIX}:val:{_digest(repr((parts, stamp)))}"

    def _bump(self, gen_key):
        try:
            self.backend.incr(gen_key)
        except ValueError:
            self.backend.set(gen_key, 1, None)

    def get(self, key):
        """Return (hit, value) for a key."""
        entry = self.backend.get(self._storage_key(key))
        if entry is None:
            return False, None
        return True, entry["value"]

    def set(self, key, value):
        self.backend.set(
            self._storage_key(key),
            {"value": value, "fetched_at": time.time()},
            self.ttl,
        )

    def fetch(self, key, loader):
        hit, value = self.get(key)
        if hit:
            return value
        value = loader()
        self.set(key, value)
        return value

    def invalidate(self, *prefix):
        if not prefix:
            self.clear()
            return
        logger.debug("Invalidating queries %r", prefix)
        self._bump(self._prefix_gen_key(tuple(str(p) for p in prefix)))

    def clear_principal(self, principal):
        self._bump(self._principal_gen_key(principal))

    def clear(self):
        self._bump(self._global_gen_key())


query_cache = QueryCache()
