"""
Runtime configuration, read once from the environment at startup.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from maman.fetch import DEFAULT_USER_AGENT
from maman.publisher import DEFAULT_REDIS_URL, queue_name

DEFAULT_ENVIRONMENT = "development"

TRUTHY = frozenset(("1", "true", "yes", "on"))


@dataclass(slots=True)
class SpiderConfig:
    """Settings a Spider is constructed with."""
    environment: str = DEFAULT_ENVIRONMENT
    redis_url: str = DEFAULT_REDIS_URL
    strict_origin: bool = False
    user_agent: str = DEFAULT_USER_AGENT
    timeout: Optional[float] = None

    @property
    def queue_name(self) -> str:
        return queue_name(self.environment)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SpiderConfig":
        """
        Build a config from environment variables.

        - MAMAN_ENV: environment name used in the queue name (default "development")
        - MAMAN_REDIS_URL: broker address (default redis://127.0.0.1/)
        - MAMAN_STRICT_ORIGIN: also compare scheme and port when filtering links
        """
        env = os.environ if environ is None else environ
        return cls(
            environment=env.get("MAMAN_ENV") or DEFAULT_ENVIRONMENT,
            redis_url=env.get("MAMAN_REDIS_URL") or DEFAULT_REDIS_URL,
            strict_origin=(env.get("MAMAN_STRICT_ORIGIN") or "").strip().lower() in TRUTHY,
        )
