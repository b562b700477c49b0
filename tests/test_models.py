import json

import pytest

from ogp_mdx.models import Audio, Image, Locale, Object, Video
from ogp_mdx.utils import UINT64_MAX, parse_uint


def test_object_defaults_are_empty():
    obj = Object()
    assert obj.title == ""
    assert obj.images == [] and obj.audios == [] and obj.videos == []
    assert obj.locale is None


def test_object_lists_are_not_shared():
    first, second = Object(), Object()
    first.images.append(Image(url="u"))
    assert second.images == []


def test_to_dict_is_json_serializable():
    obj = Object(
        title="T",
        images=[Image(url="u", width=10)],
        audios=[Audio(url="a", type="audio/mpeg")],
        locale=Locale(locale="en_US", alternates=["de_DE"]),
        videos=[Video(url="v", alt="clip")],
    )
    data = json.loads(json.dumps(obj.to_dict()))
    assert data["title"] == "T"
    assert data["images"][0] == {
        "url": "u", "secure_url": "", "type": "", "width": 10, "height": 0, "alt": "",
    }
    assert data["locale"] == {"locale": "en_US", "alternates": ["de_DE"]}
    assert Object.from_dict(data) == obj


def test_to_dict_without_locale():
    assert Object(title="T").to_dict()["locale"] is None


def test_from_dict_fills_defaults_and_ignores_unknown_keys():
    obj = Object.from_dict({
        "title": "Partial",
        "images": [{"url": "u", "height": "20"}],
        "rating": 5,
    })
    assert obj == Object(title="Partial", images=[Image(url="u", height=20)])


def test_from_dict_keeps_empty_locale_entity():
    obj = Object.from_dict({"locale": {"alternates": ["fr_FR"]}})
    assert obj.locale == Locale(locale="", alternates=["fr_FR"])


@pytest.mark.parametrize("value", [-5, 1.5, "12px", "-1", True])
def test_from_dict_rejects_invalid_dimensions(value):
    with pytest.raises(ValueError):
        Object.from_dict({"images": [{"url": "u", "width": value}]})


def test_from_dict_treats_missing_dimensions_as_unset():
    obj = Object.from_dict({"videos": [{"url": "v", "width": None, "height": ""}]})
    assert obj.videos == [Video(url="v")]


def test_parse_uint_accepts_plain_decimal():
    assert parse_uint("0") == 0
    assert parse_uint("0042") == 42
    assert parse_uint(str(UINT64_MAX)) == UINT64_MAX


def test_parse_uint_rejects_everything_else():
    for value in ("", "-0", "+1", "1e3", "0x10", " 1", str(UINT64_MAX + 1)):
        assert parse_uint(value) is None
