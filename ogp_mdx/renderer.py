"""Render Open Graph protocol objects back into ``<meta>`` elements."""

from __future__ import annotations

from typing import List, Union

from bs4 import BeautifulSoup, Tag
from bs4.dammit import EntitySubstitution
from bs4.formatter import HTMLFormatter

from .config import PROPERTY_PREFIX
from .models import Audio, Image, Metadata, Object, Video


class InsertionOrderFormatter(HTMLFormatter):
    """HTML formatter that keeps attributes in the order they were set."""

    def attributes(self, tag):
        return list(tag.attrs.items())


FORMATTER = InsertionOrderFormatter(entity_substitution=EntitySubstitution.substitute_xml)


def _media_metadata(family: str, media: Union[Image, Video]) -> List[Metadata]:
    prefix = f"{PROPERTY_PREFIX}{family}"
    nodes: List[Metadata] = []
    if media.url:
        nodes.append(Metadata(prefix, media.url))
    if media.secure_url:
        nodes.append(Metadata(f"{prefix}:secure_url", media.secure_url))
    if media.type:
        nodes.append(Metadata(f"{prefix}:type", media.type))
    if media.width:
        nodes.append(Metadata(f"{prefix}:width", str(media.width)))
    if media.height:
        nodes.append(Metadata(f"{prefix}:height", str(media.height)))
    if media.alt:
        nodes.append(Metadata(f"{prefix}:alt", media.alt))
    return nodes


def _audio_metadata(audio: Audio) -> List[Metadata]:
    nodes: List[Metadata] = []
    if audio.url:
        nodes.append(Metadata("og:audio", audio.url))
    if audio.secure_url:
        nodes.append(Metadata("og:audio:secure_url", audio.secure_url))
    if audio.type:
        nodes.append(Metadata("og:audio:type", audio.type))
    return nodes


def render(obj: Object) -> List[Metadata]:
    """Return the meta element descriptors for ``obj`` in canonical order."""
    nodes: List[Metadata] = []
    if obj.title:
        nodes.append(Metadata("og:title", obj.title))
    if obj.type:
        nodes.append(Metadata("og:type", obj.type))
    for image in obj.images:
        nodes.extend(_media_metadata("image", image))
    if obj.url:
        nodes.append(Metadata("og:url", obj.url))
    for audio in obj.audios:
        nodes.extend(_audio_metadata(audio))
    if obj.description:
        nodes.append(Metadata("og:description", obj.description))
    if obj.determiner:
        nodes.append(Metadata("og:determiner", obj.determiner))
    # A locale created only by alternates still reports its (empty) primary value.
    if obj.locale is not None:
        nodes.append(Metadata("og:locale", obj.locale.locale))
        for alternate in obj.locale.alternates:
            nodes.append(Metadata("og:locale:alternate", alternate))
    if obj.site_name:
        nodes.append(Metadata("og:site_name", obj.site_name))
    for video in obj.videos:
        nodes.extend(_media_metadata("video", video))
    return nodes


def to_tags(obj: Object) -> List[Tag]:
    """Build detached BeautifulSoup ``meta`` tags for ``obj``."""
    soup = BeautifulSoup("", "html.parser")
    return [
        soup.new_tag("meta", attrs={"property": node.property, "content": node.content})
        for node in render(obj)
    ]


def to_html(obj: Object, separator: str = "\n") -> str:
    """Serialize ``obj`` as ``<meta property=".." content=".."/>`` markup."""
    return separator.join(tag.decode(formatter=FORMATTER) for tag in to_tags(obj))
