"""Test build_url() and the parse/build round trip."""

import dataclasses

import pytest

from urisplit.parse import Authority
from urisplit.parse import UrlComponents
from urisplit.parse import UserInfo
from urisplit.parse import build_url
from urisplit.parse import parse_url
from urisplit.query import FormCodec


class TestBuildUrl:
    """Test build_url()."""

    def test_all_components(self) -> None:
        components = UrlComponents(
            scheme="https",
            authority=Authority(host="[2001:db8::1]", user_info=UserInfo("usr", "pwd"), port=80),
            path="/path",
            query={"q": "1", "empty": ""},
            fragment="frag",
        )
        assert build_url(components) == "https://usr:pwd@[2001:db8::1]:80/path?q=1&empty=#frag"
        assert components.serialize() == build_url(components)

    def test_opaque(self) -> None:
        assert build_url(UrlComponents(scheme="tel", path="+1-816-555-1212")) == "tel:+1-816-555-1212"

    def test_scheme_only(self) -> None:
        assert build_url(UrlComponents(scheme="about")) == "about:"

    def test_empty_fragment(self) -> None:
        assert build_url(UrlComponents(scheme="s", authority=Authority(host="h"), fragment="")) == "s://h#"

    def test_codec_is_used_for_query(self) -> None:
        components = UrlComponents(scheme="s", authority=Authority(host="h"), query={"p": "/a b"})
        assert build_url(components) == "s://h?p=%2Fa+b"
        assert build_url(components, FormCodec(safe="/")) == "s://h?p=/a+b"


_ROUND_TRIP_CASES: list[UrlComponents] = [
    UrlComponents(
        scheme="https",
        authority=Authority(host="[2001:db8::1]", user_info=UserInfo("usr", "pwd"), port=80),
        path="/path",
        query={"q": "1"},
        fragment="frag",
    ),
    UrlComponents(
        scheme="http",
        authority=Authority(host="example.com", user_info=UserInfo("", None)),
        path="",
        query={"a": "", "b": "two words", "c": "x=y"},
        fragment="",
    ),
    UrlComponents(
        scheme="ftp",
        authority=Authority(host="", port=70000),
        path="/a/b/",
        query={"k": "v"},
        fragment="section?2",
    ),
]


class TestRoundTrip:
    """Test that build_url() and parse_url() undo each other."""

    @pytest.mark.parametrize("components", _ROUND_TRIP_CASES)
    def test_parse_of_build(self, components: UrlComponents) -> None:
        assert parse_url(build_url(components)) == components

    @pytest.mark.parametrize("components", _ROUND_TRIP_CASES)
    def test_reparse_is_idempotent(self, components: UrlComponents) -> None:
        once = parse_url(build_url(components))
        twice = parse_url(build_url(once))
        assert once == twice

    def test_copy_is_equal(self) -> None:
        original = _ROUND_TRIP_CASES[0]
        assert dataclasses.replace(original) == original
        assert dataclasses.replace(original, fragment="other") != original

    def test_duplicate_keys_collapse(self) -> None:
        """The codec keeps the last value, so a repeated key does not survive the trip."""
        components = parse_url("s://h?a=1&a=2")
        assert components.query == {"a": "2"}
        assert build_url(components) == "s://h?a=2"

    def test_body_without_pairs_is_no_query(self) -> None:
        """A body like '&' decodes to nothing and is stored as no query, so it rebuilds cleanly."""
        components = parse_url("s://h?&#f")
        assert components.query is None
        assert parse_url(build_url(components)) == components
        assert parse_url("s://h/p?&&").query is None

    def test_not_hashable(self) -> None:
        """The query dict can change in place, so components refuse to hash."""
        with pytest.raises(TypeError):
            hash(parse_url("s://h?a=1"))
