"""
Prediction Cache Backends

One record per day, write-once: insert_if_absent never overwrites an existing
day. Backends: in-memory (development/tests), Redis, and Postgres via asyncpg.
Driver and connection errors surface as CacheUnavailableError.
"""

import asyncio
import json
import time

from abc import ABC, abstractmethod
from typing import Any

import asyncpg
import redis.asyncio as redis

from redis.exceptions import RedisError

from app.core.environment import CacheConfig
from app.core.logging import get_cache_logger
from forecast.core_types import DayCondition
from forecast.errors import CacheUnavailableError


class PredictionCache(ABC):
    """Abstract day -> DayCondition store."""

    name: str = "abstract"

    async def initialize(self) -> None:
        """Open connections and create storage if needed."""

    async def close(self) -> None:
        """Release connections."""

    @abstractmethod
    async def exists(self, day: int) -> bool:
        """Check if a record exists for day."""

    @abstractmethod
    async def get(self, day: int) -> DayCondition | None:
        """Get the record for day, or None."""

    @abstractmethod
    async def insert_if_absent(self, condition: DayCondition) -> bool:
        """Store condition unless its day is present. True if written."""

    async def health_check(self) -> dict[str, Any]:
        """Round-trip check used by the readiness endpoint."""
        try:
            await self.exists(0)
            return {"status": "healthy", "backend": self.name}
        except CacheUnavailableError as e:
            return {"status": "unhealthy", "backend": self.name, "error": str(e)}


class MemoryPredictionCache(PredictionCache):
    """In-memory cache for development/single-instance."""

    name = "memory"

    def __init__(self):
        self._records: dict[int, DayCondition] = {}
        self._lock = asyncio.Lock()
        self.logger = get_cache_logger(self.name)
        self.logger.info("Memory prediction cache initialized")

    async def exists(self, day: int) -> bool:
        async with self._lock:
            return day in self._records

    async def get(self, day: int) -> DayCondition | None:
        async with self._lock:
            return self._records.get(day)

    async def insert_if_absent(self, condition: DayCondition) -> bool:
        async with self._lock:
            if condition.day in self._records:
                return False
            self._records[condition.day] = condition
            return True

    def __len__(self) -> int:
        return len(self._records)


class RedisPredictionCache(PredictionCache):
    """Redis cache for multi-instance deployments. One JSON key per day."""

    name = "redis"

    def __init__(
        self,
        redis_url: str = "redis://localhost:6379/0",
        key_prefix: str = "weather:day:",
        retry_interval: float = 5.0,
    ):
        self.redis_url = redis_url
        self.key_prefix = key_prefix
        self.retry_interval = retry_interval
        self.redis = None
        self._retry_at = 0.0
        self.logger = get_cache_logger(self.name)
        self.logger.info(f"Redis prediction cache configured: {redis_url}")

    def _key(self, day: int) -> str:
        return f"{self.key_prefix}{day}"

    async def initialize(self) -> None:
        await self._ensure_connection()

    async def _ensure_connection(self):
        """Ensure Redis connection is established.

        After a failed connect, further attempts are skipped until
        `retry_interval` seconds have passed.
        """
        if self.redis is not None:
            return
        if time.monotonic() < self._retry_at:
            raise CacheUnavailableError("Redis unavailable; waiting before reconnecting")

        client = redis.from_url(self.redis_url, decode_responses=True)
        try:
            await client.ping()
        except RedisError as e:
            await client.aclose()
            self._retry_at = time.monotonic() + self.retry_interval
            raise CacheUnavailableError(f"Failed to connect to Redis: {e}") from e
        self.redis = client
        self._retry_at = 0.0
        self.logger.info("Redis connection established")

    async def close(self) -> None:
        if self.redis is not None:
            await self.redis.aclose()
            self.redis = None

    async def exists(self, day: int) -> bool:
        await self._ensure_connection()
        try:
            return await self.redis.exists(self._key(day)) > 0
        except RedisError as e:
            raise CacheUnavailableError(f"Redis exists error: {e}") from e

    async def get(self, day: int) -> DayCondition | None:
        await self._ensure_connection()
        try:
            value = await self.redis.get(self._key(day))
        except RedisError as e:
            raise CacheUnavailableError(f"Redis get error: {e}") from e
        if value is None:
            return None
        return DayCondition.from_dict(json.loads(value))

    async def insert_if_absent(self, condition: DayCondition) -> bool:
        await self._ensure_connection()
        try:
            written = await self.redis.set(
                self._key(condition.day), json.dumps(condition.to_dict()), nx=True
            )
        except RedisError as e:
            raise CacheUnavailableError(f"Redis set error: {e}") from e
        return bool(written)


class PostgresPredictionCache(PredictionCache):
    """Postgres cache through an asyncpg connection pool."""

    name = "postgres"

    CREATE_TABLE_SQL = """
        CREATE TABLE IF NOT EXISTS weather_conditions (
            day INTEGER PRIMARY KEY,
            condition TEXT NOT NULL,
            perimeter DOUBLE PRECISION DEFAULT NULL
        )
    """
    INSERT_SQL = (
        "INSERT INTO weather_conditions (day, condition, perimeter) "
        "VALUES ($1, $2, $3) ON CONFLICT (day) DO NOTHING"
    )
    SELECT_SQL = "SELECT day, condition, perimeter FROM weather_conditions WHERE day = $1"
    EXISTS_SQL = "SELECT 1 FROM weather_conditions WHERE day = $1"

    def __init__(self, database_url: str, min_connections: int = 1, max_connections: int = 10):
        self.database_url = database_url
        self.min_connections = min_connections
        self.max_connections = max_connections
        self.pool: asyncpg.Pool | None = None
        self.logger = get_cache_logger(self.name)

    async def initialize(self) -> None:
        """Create the connection pool and the table."""
        if self.pool is not None:
            return
        try:
            self.pool = await asyncpg.create_pool(
                self.database_url,
                min_size=self.min_connections,
                max_size=self.max_connections,
                command_timeout=60,
            )
            async with self.pool.acquire() as conn:
                await conn.execute(self.CREATE_TABLE_SQL)
        except (OSError, asyncpg.PostgresError) as e:
            raise CacheUnavailableError(f"Failed to initialize Postgres cache: {e}") from e
        self.logger.info(
            f"Postgres connection pool created: {self.min_connections}-{self.max_connections}"
        )

    async def close(self) -> None:
        if self.pool is not None:
            await self.pool.close()
            self.pool = None
            self.logger.info("Postgres connection pool closed")

    async def _fetch(self, method: str, sql: str, *args):
        if self.pool is None:
            await self.initialize()
        try:
            async with self.pool.acquire() as conn:
                return await getattr(conn, method)(sql, *args)
        except (OSError, asyncpg.PostgresError, asyncpg.InterfaceError) as e:
            raise CacheUnavailableError(f"Postgres {method} error: {e}") from e

    async def exists(self, day: int) -> bool:
        return await self._fetch("fetchval", self.EXISTS_SQL, day) is not None

    async def get(self, day: int) -> DayCondition | None:
        row = await self._fetch("fetchrow", self.SELECT_SQL, day)
        if row is None:
            return None
        return DayCondition.from_dict(dict(row))

    async def insert_if_absent(self, condition: DayCondition) -> bool:
        status = await self._fetch(
            "execute",
            self.INSERT_SQL,
            condition.day,
            condition.condition.value,
            condition.perimeter,
        )
        # asyncpg returns the command tag, e.g. "INSERT 0 1" or "INSERT 0 0"
        return status.endswith(" 1")


def build_prediction_cache(config: CacheConfig) -> PredictionCache:
    """Create the cache backend selected by configuration."""
    if config.backend == "redis":
        return RedisPredictionCache(config.redis_url, key_prefix=config.key_prefix)
    if config.backend == "postgres":
        return PostgresPredictionCache(
            config.database_url,
            min_connections=config.min_connections,
            max_connections=config.max_connections,
        )
    return MemoryPredictionCache()
