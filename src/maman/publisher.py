"""
Publishing job envelopes to a Redis-backed work queue.
"""
from __future__ import annotations

from typing import Any, Mapping, Optional

import redis

from maman.page import dump_job

DEFAULT_REDIS_URL = "redis://127.0.0.1/"


def queue_name(environment: str) -> str:
    """Name of the Redis list jobs are pushed to."""
    return f"{environment}:queue:maman"


class PublishError(Exception):
    """A job could not be pushed to the queue."""

    def __init__(self, category: str, description: str) -> None:
        super().__init__(f"{category}: {description}")
        self.category = category
        self.description = description


class RedisQueuePublisher:
    """LPUSH serialized jobs onto a Redis list."""

    def __init__(self, redis_url: str = DEFAULT_REDIS_URL, client: Optional[redis.Redis] = None) -> None:
        self.redis_url = redis_url
        self._client = client

    @property
    def client(self) -> redis.Redis:
        if self._client is None:
            self._client = redis.Redis.from_url(self.redis_url)
        return self._client

    def push(self, queue: str, job: Mapping[str, Any]) -> None:
        """Push one job; any Redis or broker URL failure is raised as PublishError."""
        try:
            self.client.lpush(queue, dump_job(job))
        except (redis.exceptions.RedisError, ValueError) as e:
            raise PublishError(type(e).__name__, str(e)) from e

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
