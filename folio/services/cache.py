"""Read-through caches for projects and page groups.

The ProjectService receives one cache per entity kind. Every backend offers
the same four operations: get, put, invalidate and clear. Entries are filled
on read and on create and are dropped (never refreshed) on every write.
Values are plain JSON-compatible dicts and callers always get a copy.
"""

import copy
import json
import logging

import redis

logger = logging.getLogger(__name__)


class MemoryCache:
    """Process-local dict cache. Lost on restart, which is fine."""

    def __init__(self):
        self._entries = {}

    def get(self, key):
        value = self._entries.get(key)
        return copy.deepcopy(value) if value is not None else None

    def put(self, key, value):
        self._entries[key] = copy.deepcopy(value)

    def invalidate(self, key):
        self._entries.pop(key, None)

    def clear(self):
        self._entries.clear()

    def __contains__(self, key):
        return key in self._entries

    def __len__(self):
        return len(self._entries)


class NullCache:
    """Cache that never stores anything."""

    def get(self, key):
        return None

    def put(self, key, value):
        pass

    def invalidate(self, key):
        pass

    def clear(self):
        pass

    def __contains__(self, key):
        return False

    def __len__(self):
        return 0


class RedisCache:
    """Cache shared across workers, stored as JSON strings with a TTL.

    Redis errors are logged and treated as cache misses; the database stays
    the source of truth.
    """

    def __init__(self, client, namespace, ttl_seconds=3600):
        self._client = client
        self._prefix = f'folio:{namespace}:'
        self._ttl = ttl_seconds

    def _key(self, key):
        return f'{self._prefix}{key}'

    def get(self, key):
        try:
            raw = self._client.get(self._key(key))
        except redis.RedisError as e:
            logger.error(f'Redis cache get error: {e}')
            return None
        return json.loads(raw) if raw else None

    def put(self, key, value):
        try:
            self._client.setex(self._key(key), self._ttl, json.dumps(value))
        except redis.RedisError as e:
            logger.error(f'Redis cache put error: {e}')

    def invalidate(self, key):
        try:
            self._client.delete(self._key(key))
        except redis.RedisError as e:
            logger.error(f'Redis cache invalidate error: {e}')

    def clear(self):
        try:
            keys = list(self._client.scan_iter(match=f'{self._prefix}*'))
            if keys:
                self._client.delete(*keys)
        except redis.RedisError as e:
            logger.error(f'Redis cache clear error: {e}')


def get_redis(redis_url):
    """Open a Redis connection, or None when unavailable."""
    if not redis_url:
        logger.warning('REDIS_URL not set - falling back to in-process cache')
        return None

    try:
        client = redis.from_url(redis_url, decode_responses=True)
        # Test connection
        client.ping()
        logger.info('Redis connected successfully')
        return client
    except Exception as e:
        logger.error(f'Redis connection failed: {e}')
        return None


def build_cache(config, namespace):
    """Create the cache backend selected by CACHE_BACKEND."""
    backend = (config.get('CACHE_BACKEND') or 'memory').lower()

    if backend == 'none':
        return NullCache()

    if backend == 'redis':
        client = get_redis(config.get('REDIS_URL'))
        if client is not None:
            return RedisCache(client, namespace, config.get('CACHE_TTL_SECONDS', 3600))

    return MemoryCache()
