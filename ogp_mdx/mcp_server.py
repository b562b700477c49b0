"""MCP server exposing ogp-mdx extract/render tools."""

from __future__ import annotations

import json
import logging

from anyio import to_thread
from mcp.server.fastmcp import FastMCP

from .config import FetchConfig
from .fetch import fetch_html
from .models import Object
from .parser import parse
from .renderer import to_html

logger = logging.getLogger("ogp_mdx.mcp")
logger.setLevel(logging.ERROR)

mcp = FastMCP(name="ogp-mdx")


@mcp.tool()
async def extract(url: str) -> str:
    """Fetch a web page and return its Open Graph object as JSON."""

    body = await to_thread.run_sync(fetch_html, url, FetchConfig())
    obj = parse(body)
    return json.dumps(obj.to_dict(), ensure_ascii=False)


@mcp.tool()
async def render(object_json: str) -> str:
    """Render an Open Graph object given as JSON into <meta> tags."""

    data = json.loads(object_json)
    if not isinstance(data, dict):
        raise ValueError("Expected a JSON object describing an Open Graph object")
    return to_html(Object.from_dict(data))


def main() -> None:
    """Entry point for running the MCP server."""
    logging.basicConfig(level=logging.ERROR)
    mcp.run()


if __name__ == "__main__":
    main()
