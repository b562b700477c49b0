"""Data models for Open Graph protocol objects."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from .utils import parse_uint


@dataclass
class Metadata:
    """A single ``property``/``content`` pair taken from or destined for a meta tag."""

    property: str
    content: str


@dataclass
class Image:
    """An image which represents the object within the graph."""

    url: str = ""
    secure_url: str = ""
    type: str = ""
    width: int = 0
    height: int = 0
    alt: str = ""


@dataclass
class Video:
    """A video that complements the object."""

    url: str = ""
    secure_url: str = ""
    type: str = ""
    width: int = 0
    height: int = 0
    alt: str = ""


@dataclass
class Audio:
    """An audio file to accompany the object."""

    url: str = ""
    secure_url: str = ""
    type: str = ""


@dataclass
class Locale:
    """Primary locale plus the alternates the page is also available in."""

    locale: str = ""
    alternates: List[str] = field(default_factory=list)


@dataclass
class Object:
    """The Open Graph protocol object described by a page."""

    title: str = ""
    type: str = ""
    images: List[Image] = field(default_factory=list)
    url: str = ""
    audios: List[Audio] = field(default_factory=list)
    description: str = ""
    determiner: str = ""
    locale: Optional[Locale] = None
    site_name: str = ""
    videos: List[Video] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Object":
        """Build an object from the shape produced by :meth:`to_dict`.

        Missing keys fall back to defaults and unknown keys are ignored, so
        hand-written JSON only needs the fields it cares about.
        """
        locale_data = data.get("locale")
        locale = None
        if locale_data is not None:
            locale = Locale(
                locale=str(locale_data.get("locale") or ""),
                alternates=[str(a) for a in locale_data.get("alternates") or []],
            )
        return cls(
            title=str(data.get("title") or ""),
            type=str(data.get("type") or ""),
            images=[_media_from_dict(Image, item) for item in data.get("images") or []],
            url=str(data.get("url") or ""),
            audios=[_audio_from_dict(item) for item in data.get("audios") or []],
            description=str(data.get("description") or ""),
            determiner=str(data.get("determiner") or ""),
            locale=locale,
            site_name=str(data.get("site_name") or ""),
            videos=[_media_from_dict(Video, item) for item in data.get("videos") or []],
        )


def _media_from_dict(kind, data: Mapping[str, Any]):
    return kind(
        url=str(data.get("url") or ""),
        secure_url=str(data.get("secure_url") or ""),
        type=str(data.get("type") or ""),
        width=_dimension(data, "width"),
        height=_dimension(data, "height"),
        alt=str(data.get("alt") or ""),
    )


def _dimension(data: Mapping[str, Any], key: str) -> int:
    value = data.get(key)
    if value is None or value == "":
        return 0
    number = parse_uint(str(value))
    if number is None or isinstance(value, bool):
        raise ValueError(f"{key} must be an unsigned integer, got {value!r}")
    return number


def _audio_from_dict(data: Mapping[str, Any]) -> Audio:
    return Audio(
        url=str(data.get("url") or ""),
        secure_url=str(data.get("secure_url") or ""),
        type=str(data.get("type") or ""),
    )
