"""Exceptions raised by ogp-mdx."""

from __future__ import annotations


class OGPError(Exception):
    """Base class for every error raised by this package."""


class ParseError(OGPError):
    """The document source or the tokenizer failed before the stream ended."""


class ValidationError(ParseError):
    """A pair was rejected by strict-mode folding."""

    def __init__(self, message: str, property: str, content: str) -> None:
        super().__init__(message)
        self.property = property
        self.content = content


class FetchError(OGPError):
    """A remote page could not be downloaded."""
