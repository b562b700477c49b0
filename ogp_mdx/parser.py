"""Extract Open Graph protocol objects from HTML documents.

Extraction happens in two passes. :func:`collect` walks the tag events
produced by the tokenizer and keeps the ``property``/``content`` pair of
every ``meta`` element in the ``og:`` namespace. :func:`fold` then replays
those pairs, in document order, into an :class:`~ogp_mdx.models.Object`.

Folding is lenient by default. Scalars keep their first value, detail
properties (``og:image:width`` and friends) update the most recently
started entity of their family and are dropped when there is none, and
malformed integers leave the field at 0. ``strict=True`` turns the dropped
cases into :class:`~ogp_mdx.errors.ValidationError`.
"""

from __future__ import annotations

import codecs
import logging
from dataclasses import dataclass, field
from html.parser import HTMLParser
from typing import IO, Callable, Dict, Iterable, Iterator, List, Optional, Tuple, Union

from bs4 import UnicodeDammit

from .config import DEFAULT_CHUNK_SIZE, PROPERTY_PREFIX
from .errors import ParseError, ValidationError
from .models import Audio, Image, Locale, Metadata, Object, Video
from .utils import parse_uint

logger = logging.getLogger("ogp_mdx.parser")

START_TAG = "start"
SELF_CLOSING_TAG = "startend"
END_TAG = "end"
TAG_OPEN_KINDS = frozenset({START_TAG, SELF_CLOSING_TAG})
# Elements whose content the tokenizer reports as text, never as tags.
RAW_TEXT_ELEMENTS = frozenset({
    "iframe", "noembed", "noframes", "noscript", "plaintext",
    "script", "style", "textarea", "title", "xmp",
})

Source = Union[str, bytes, bytearray, IO[str], IO[bytes]]


@dataclass
class TagEvent:
    """A tag reported by the tokenizer, with its attributes in document order."""

    kind: str
    name: str
    attrs: List[Tuple[str, str]] = field(default_factory=list)


class _TagEventTokenizer(HTMLParser):
    """Buffers tag callbacks from :class:`HTMLParser` as :class:`TagEvent` objects."""

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.pending: List[TagEvent] = []

    def handle_starttag(self, tag, attrs):
        self.pending.append(TagEvent(START_TAG, tag, _normalize_attrs(attrs)))
        if tag in RAW_TEXT_ELEMENTS:
            self.set_cdata_mode(tag)

    def handle_startendtag(self, tag, attrs):
        self.pending.append(TagEvent(SELF_CLOSING_TAG, tag, _normalize_attrs(attrs)))

    def handle_endtag(self, tag):
        self.pending.append(TagEvent(END_TAG, tag))

    def drain(self) -> List[TagEvent]:
        events, self.pending = self.pending, []
        return events


def _normalize_attrs(attrs) -> List[Tuple[str, str]]:
    # Valueless attributes are reported as None.
    return [(key, value or "") for key, value in attrs]


def _decode_document(data: bytes, encoding: Optional[str]) -> str:
    if encoding:
        return data.decode(encoding, errors="replace")
    dammit = UnicodeDammit(data, is_html=True)
    if dammit.unicode_markup is None:
        raise ParseError("Unable to determine the character encoding of the document")
    logger.debug("Detected document encoding %s", dammit.original_encoding)
    return dammit.unicode_markup


def _iter_text_chunks(source: Source, encoding: Optional[str], chunk_size: int) -> Iterator[str]:
    if isinstance(source, str):
        yield source
        return
    if isinstance(source, (bytes, bytearray)):
        yield _decode_document(bytes(source), encoding)
        return

    decoder = None
    while True:
        chunk = source.read(chunk_size)
        if not chunk:
            break
        if isinstance(chunk, str):
            yield chunk
            continue
        if decoder is None:
            decoder = codecs.getincrementaldecoder(encoding or "utf-8")(errors="replace")
        yield decoder.decode(chunk)
    if decoder is not None:
        tail = decoder.decode(b"", final=True)
        if tail:
            yield tail


def _iter_events(source: Source, encoding: Optional[str], chunk_size: int) -> Iterator[TagEvent]:
    tokenizer = _TagEventTokenizer()
    try:
        for text in _iter_text_chunks(source, encoding, chunk_size):
            tokenizer.feed(text)
            yield from tokenizer.drain()
        tokenizer.close()
    except ParseError:
        raise
    except Exception as exc:  # pylint: disable=broad-except
        raise ParseError(f"Failed to tokenize document: {exc}") from exc
    yield from tokenizer.drain()


def iter_tag_events(
    source: Source,
    encoding: Optional[str] = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> Iterator[TagEvent]:
    """Tokenize ``source`` lazily and yield its tag events.

    ``source`` may be a string, a bytes object, or a readable text or binary
    file object. Whole ``bytes`` input has its encoding sniffed unless
    ``encoding`` is given; binary streams are decoded incrementally with
    ``encoding`` (UTF-8 by default). Errors raised while reading or
    tokenizing surface as :class:`ParseError` when the iterator is consumed.
    """
    if not isinstance(source, (str, bytes, bytearray)) and not hasattr(source, "read"):
        raise TypeError(f"Expected str, bytes or a readable object, got {type(source).__name__}")
    return _iter_events(source, encoding, chunk_size)


def collect(events: Iterable[TagEvent]) -> List[Metadata]:
    """Return the ``og:`` pairs of every opening ``meta`` tag, in document order."""
    raw: List[Metadata] = []
    for event in events:
        if event.kind not in TAG_OPEN_KINDS or event.name != "meta":
            continue
        prop = content = ""
        for key, value in event.attrs:
            if key == "property":
                prop = value
            elif key == "content":
                content = value
        if not prop.startswith(PROPERTY_PREFIX):
            continue
        raw.append(Metadata(property=prop, content=content))
    return raw


# An action applies one pair to the object under construction. It returns a
# reason string when the pair had to be dropped, None otherwise.
Action = Callable[[Object, str], Optional[str]]


def _set_scalar(name: str) -> Action:
    def apply(obj: Object, content: str) -> Optional[str]:
        if not getattr(obj, name):
            setattr(obj, name, content)
        return None

    return apply


def _append_entity(list_name: str, factory: Callable[..., object]) -> Action:
    def apply(obj: Object, content: str) -> Optional[str]:
        getattr(obj, list_name).append(factory(url=content))
        return None

    return apply


def _set_entity_field(
    list_name: str,
    field_name: str,
    convert: Optional[Callable[[str], Optional[int]]] = None,
) -> Action:
    def apply(obj: Object, content: str) -> Optional[str]:
        entities = getattr(obj, list_name)
        if not entities:
            return f"no entry in {list_name} to attach to"
        current = entities[-1]
        if getattr(current, field_name):
            return None
        value: object = content
        if convert is not None:
            value = convert(content)
            if value is None:
                return f"malformed integer {content!r}"
        setattr(current, field_name, value)
        return None

    return apply


def _set_locale(obj: Object, content: str) -> Optional[str]:
    if obj.locale is None:
        obj.locale = Locale()
    if not obj.locale.locale:
        obj.locale.locale = content
    return None


def _append_locale_alternate(obj: Object, content: str) -> Optional[str]:
    if obj.locale is None:
        obj.locale = Locale()
    obj.locale.alternates.append(content)
    return None


def _media_actions(family: str, list_name: str, factory: Callable[..., object]) -> Dict[str, Action]:
    prefix = f"{PROPERTY_PREFIX}{family}"
    return {
        prefix: _append_entity(list_name, factory),
        f"{prefix}:secure_url": _set_entity_field(list_name, "secure_url"),
        f"{prefix}:type": _set_entity_field(list_name, "type"),
        f"{prefix}:width": _set_entity_field(list_name, "width", parse_uint),
        f"{prefix}:height": _set_entity_field(list_name, "height", parse_uint),
        f"{prefix}:alt": _set_entity_field(list_name, "alt"),
    }


PROPERTY_ACTIONS: Dict[str, Action] = {
    "og:title": _set_scalar("title"),
    "og:type": _set_scalar("type"),
    **_media_actions("image", "images", Image),
    "og:image:url": _append_entity("images", Image),
    "og:url": _set_scalar("url"),
    "og:audio": _append_entity("audios", Audio),
    "og:audio:secure_url": _set_entity_field("audios", "secure_url"),
    "og:audio:type": _set_entity_field("audios", "type"),
    "og:description": _set_scalar("description"),
    "og:determiner": _set_scalar("determiner"),
    "og:locale": _set_locale,
    "og:locale:alternate": _append_locale_alternate,
    "og:site_name": _set_scalar("site_name"),
    **_media_actions("video", "videos", Video),
}


def _reject(pair: Metadata, reason: str, strict: bool) -> None:
    if strict:
        raise ValidationError(
            f"Rejected {pair.property}={pair.content!r}: {reason}",
            pair.property,
            pair.content,
        )
    logger.debug("Ignoring %s=%r: %s", pair.property, pair.content, reason)


def fold(pairs: Iterable[Metadata], strict: bool = False) -> Object:
    """Fold ordered ``og:`` pairs into a new :class:`Object`."""
    obj = Object()
    for pair in pairs:
        action = PROPERTY_ACTIONS.get(pair.property)
        if action is None:
            _reject(pair, "unknown property", strict)
            continue
        reason = action(obj, pair.content)
        if reason:
            _reject(pair, reason, strict)
    return obj


def parse(source: Source, encoding: Optional[str] = None, strict: bool = False) -> Object:
    """Parse an HTML document and return its Open Graph protocol object.

    Failures of the source or the tokenizer are raised as :class:`ParseError`
    with the original exception chained as ``__cause__``.
    """
    raw = collect(iter_tag_events(source, encoding=encoding))
    logger.debug("Collected %d og: metadata pairs", len(raw))
    return fold(raw, strict=strict)
