"""Open Graph protocol metadata extraction and rendering."""

from .errors import FetchError, OGPError, ParseError, ValidationError
from .models import Audio, Image, Locale, Metadata, Object, Video
from .parser import collect, fold, iter_tag_events, parse
from .renderer import render, to_html, to_tags

__all__ = [
    "Audio",
    "FetchError",
    "Image",
    "Locale",
    "Metadata",
    "OGPError",
    "Object",
    "ParseError",
    "ValidationError",
    "Video",
    "collect",
    "fold",
    "iter_tag_events",
    "parse",
    "render",
    "to_html",
    "to_tags",
]
