"""Download helpers used by the command line and MCP entry points."""

from __future__ import annotations

import logging
from typing import List, Optional

import requests

from .config import DEFAULT_CHUNK_SIZE, FetchConfig
from .errors import FetchError

logger = logging.getLogger("ogp_mdx.fetch")


def is_remote(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def fetch_html(
    url: str,
    config: FetchConfig,
    session: Optional[requests.Session] = None,
) -> bytes:
    """Download ``url`` and return the raw body, capped at ``config.max_bytes``."""
    session = session or requests.Session()
    headers = {"User-Agent": config.user_agent}
    logger.info("Fetching %s", url)
    try:
        with session.get(url, headers=headers, timeout=config.timeout, stream=True) as resp:
            resp.raise_for_status()
            chunks: List[bytes] = []
            total = 0
            for chunk in resp.iter_content(chunk_size=DEFAULT_CHUNK_SIZE):
                if not chunk:
                    continue
                total += len(chunk)
                if total > config.max_bytes:
                    raise FetchError(f"{url} is larger than {config.max_bytes} bytes")
                chunks.append(chunk)
    except requests.RequestException as exc:
        raise FetchError(f"Failed to fetch {url}: {exc}") from exc
    logger.debug("Fetched %s (%d bytes)", url, total)
    return b"".join(chunks)
