"""Configuration objects and constants for Open Graph extraction."""

from __future__ import annotations

from dataclasses import dataclass

PROPERTY_PREFIX = "og:"
DEFAULT_USER_AGENT = "ogp-mdx/0.1 (+https://ogp.me/)"
DEFAULT_CHUNK_SIZE = 8192
DEFAULT_MAX_BYTES = 5_000_000


@dataclass
class FetchConfig:
    """Settings that control how remote pages are downloaded before parsing."""

    timeout: float = 15.0
    user_agent: str = DEFAULT_USER_AGENT
    max_bytes: int = DEFAULT_MAX_BYTES
