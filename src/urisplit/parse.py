"""urisplit.parse
Splits a URI into scheme, authority, path, query and fragment, and puts them back together.
Follows the generic syntax of RFC 3986 section 3, permissively: no component is validated
against its ABNF and nothing outside the query is percent-decoded.
"""

import dataclasses
import enum
import logging
import re

from typing import Any, Callable, Self

from .errors import (
    BuildError,
    EmptyRemainderError,
    FragmentMissingError,
    ParseError,
    PortNotNumericError,
    SchemeMissingError,
    UnexpectedRemainderError,
)
from .query import DEFAULT_CODEC, QueryCodec

logger = logging.getLogger(__name__)

# authority = everything after "//" up to the first of these
_AUTHORITY_END_PAT: re.Pattern[str] = re.compile(r"[/?#]")

# path = everything up to the first of these
_PATH_END_PAT: re.Pattern[str] = re.compile(r"[?#]")

# port = 1*DIGIT (RFC 3986 allows *DIGIT; an empty port is rejected here)
_PORT_PAT: re.Pattern[str] = re.compile(r"[0-9]+")
_NON_DIGIT_PAT: re.Pattern[str] = re.compile(r"[^0-9]")


@dataclasses.dataclass(frozen=True)
class UserInfo:
    username: str
    password: str | None = None

    def serialize(self: Self) -> str:
        """username:password"""
        if self.password is None:
            return self.username
        return f"{self.username}:{self.password}"


@dataclasses.dataclass(frozen=True)
class Authority:
    host: str
    user_info: UserInfo | None = None
    port: int | None = None

    @property
    def hostname(self: Self) -> str:
        """The host without the brackets around an IP literal."""
        if self.host.startswith("[") and self.host.endswith("]"):
            return self.host[1:-1]
        return self.host

    def serialize(self: Self) -> str:
        return build_authority(self)


@dataclasses.dataclass(frozen=True)
class UrlComponents:
    """The pieces of a parsed URI. Build one with parse_url, or by hand for build_url.
    Fields cannot be reassigned, but query is a plain dict that can still be changed in place,
    so instances are not hashable.
    """

    scheme: str
    authority: Authority | None = None
    path: str = ""
    query: dict[str, str] | None = None
    fragment: str | None = None

    __hash__ = None  # type: ignore[assignment]

    def serialize(self: Self, codec: QueryCodec = DEFAULT_CODEC) -> str:
        return build_url(self, codec)


def _split_at_first(data: str, pattern: re.Pattern[str]) -> tuple[str, str | None]:
    """Cuts data at the leftmost character matching pattern.
    The delimiter stays at the front of the remainder so the next stage can see what follows.
    e.g. _split_at_first("host:80#123", _AUTHORITY_END_PAT) == ("host:80", "#123")
    """
    m: re.Match[str] | None = pattern.search(data)
    if m is None:
        return data, None
    return data[: m.start()], data[m.start() :]


def extract_scheme(url: str) -> tuple[str, str]:
    """Everything before the first ":" is the scheme.
    Unlike RFC 3986, a ":" inside what was meant to be the authority is not guarded against.
    """
    scheme, colon, rest = url.partition(":")
    if len(colon) == 0:
        raise SchemeMissingError(url)
    return scheme, rest


def extract_authority(data: str) -> tuple[str | None, str | None]:
    """Returns (authority, remainder).
    The authority is None when data does not start with "//"; then all of data is left for the path.
    """
    if len(data) == 0:
        raise EmptyRemainderError("authority")
    if not data.startswith("//"):
        return None, data
    return _split_at_first(data[len("//") :], _AUTHORITY_END_PAT)


def extract_userinfo(authority: str) -> tuple[UserInfo | None, str]:
    userinfo, at, host_and_port = authority.partition("@")
    if len(at) == 0:
        return None, authority
    username, colon, password = userinfo.partition(":")
    return UserInfo(username=username, password=password if len(colon) > 0 else None), host_and_port


def extract_host(data: str) -> tuple[str, str | None]:
    """Returns (host, port remainder). The port remainder keeps its leading ":"."""
    if "]" in data:
        # IP-literal: the brackets are part of the host, and any ":" inside them is not a port.
        literal, bracket, after = data.partition("]")
        if len(after) == 0:
            return literal + bracket, None
        if not after.startswith(":"):
            raise UnexpectedRemainderError("host", after)
        return literal + bracket, after
    host, colon, port = data.partition(":")
    return host, colon + port if len(colon) > 0 else None


def _port_diagnostic(port: str) -> str:
    """Says what is wrong with a port that is not all ASCII digits."""
    if len(port) == 0:
        return "port is empty"
    m: re.Match[str] | None = _NON_DIGIT_PAT.search(port)
    assert m is not None
    return f"non-digit {m.group()!r} at offset {m.start()}"


def extract_port(data: str) -> int:
    if not data.startswith(":"):
        raise UnexpectedRemainderError("port", data)
    port: str = data[len(":") :]
    if _PORT_PAT.fullmatch(port) is None:
        raise PortNotNumericError(port, _port_diagnostic(port))
    # No upper bound: 65536 and beyond are accepted.
    return int(port, base=10)


def parse_authority(authority: str) -> Authority:
    """userinfo@host:port"""
    user_info, host_and_port = extract_userinfo(authority)
    host, port_rest = extract_host(host_and_port)
    port: int | None = extract_port(port_rest) if port_rest is not None else None
    return Authority(host=host, user_info=user_info, port=port)


def extract_path(data: str) -> tuple[str, str | None]:
    if len(data) == 0:
        raise EmptyRemainderError("path")
    return _split_at_first(data, _PATH_END_PAT)


def extract_query(data: str, codec: QueryCodec = DEFAULT_CODEC) -> tuple[dict[str, str] | None, str | None]:
    """Returns (query, remainder). An empty query body ("?" or "?#...") gives a None query."""
    if len(data) == 0:
        return None, None
    if data.startswith("#"):
        return None, data
    if not data.startswith("?"):
        raise UnexpectedRemainderError("query", data)
    body, hash_, fragment = data[len("?") :].partition("#")
    # A body with no pairs in it ("?&&") is no query, the same as an empty one.
    query: dict[str, str] | None = (codec.decode(body) or None) if len(body) > 0 else None
    return query, hash_ + fragment if len(hash_) > 0 else None


def extract_fragment(data: str) -> str:
    if len(data) == 0:
        raise EmptyRemainderError("fragment")
    _, hash_, fragment = data.partition("#")
    if len(hash_) == 0:
        raise FragmentMissingError(data)
    return fragment


class Stage(enum.Enum):
    SCHEME = enum.auto()
    AUTHORITY = enum.auto()
    PATH = enum.auto()
    QUERY = enum.auto()
    FRAGMENT = enum.auto()
    DONE = enum.auto()


# Each step consumes the front of its input, records what it found in fields,
# and returns the next stage along with that stage's input.
_Step = Callable[[str, dict[str, Any], QueryCodec], tuple[Stage, str]]


def _advance(stage: Stage, rest: str | None) -> tuple[Stage, str]:
    if rest is None:
        return Stage.DONE, ""
    return stage, rest


def _scheme_step(data: str, fields: dict[str, Any], codec: QueryCodec) -> tuple[Stage, str]:
    fields["scheme"], rest = extract_scheme(data)
    return Stage.AUTHORITY, rest


def _authority_step(data: str, fields: dict[str, Any], codec: QueryCodec) -> tuple[Stage, str]:
    authority, rest = extract_authority(data)
    if authority is not None:
        fields["authority"] = parse_authority(authority)
    return _advance(Stage.PATH, rest)


def _path_step(data: str, fields: dict[str, Any], codec: QueryCodec) -> tuple[Stage, str]:
    fields["path"], rest = extract_path(data)
    return _advance(Stage.QUERY, rest)


def _query_step(data: str, fields: dict[str, Any], codec: QueryCodec) -> tuple[Stage, str]:
    fields["query"], rest = extract_query(data, codec)
    return _advance(Stage.FRAGMENT, rest)


def _fragment_step(data: str, fields: dict[str, Any], codec: QueryCodec) -> tuple[Stage, str]:
    fields["fragment"] = extract_fragment(data)
    return Stage.DONE, ""


_STEPS: dict[Stage, _Step] = {
    Stage.SCHEME: _scheme_step,
    Stage.AUTHORITY: _authority_step,
    Stage.PATH: _path_step,
    Stage.QUERY: _query_step,
    Stage.FRAGMENT: _fragment_step,
}


def parse_url(url: str, codec: QueryCodec = DEFAULT_CODEC) -> UrlComponents:
    """Splits url into its components, e.g.
    parse_url("https://usr:pwd@[2001:db8::1]:80/path?q=1#frag") == UrlComponents(
        scheme="https",
        authority=Authority(host="[2001:db8::1]", user_info=UserInfo("usr", "pwd"), port=80),
        path="/path",
        query={"q": "1"},
        fragment="frag",
    )
    Stops as soon as a stage leaves nothing behind; components past that point keep their defaults.
    Raises a ParseError subclass on the first stage that fails.
    """
    fields: dict[str, Any] = {}
    stage: Stage = Stage.SCHEME
    remaining: str = url
    try:
        while stage is not Stage.DONE:
            logger.debug(f"{stage.name} <- {remaining!r}")
            stage, remaining = _STEPS[stage](remaining, fields, codec)
    except ParseError as e:
        logger.debug(f"Parsing {url!r} failed at {stage.name}: {e}")
        raise
    return UrlComponents(**fields)


def build_authority(authority: Authority) -> str:
    """Inverse of parse_authority. An empty username with user_info set still renders as "@host"."""
    result: str = ""
    if authority.user_info is not None:
        result += f"{authority.user_info.serialize()}@"
    result += authority.host
    if authority.port is not None:
        if authority.port < 0:
            raise BuildError(f"port must be non-negative, got {authority.port}")
        result += f":{authority.port}"
    return result


def build_url(components: UrlComponents, codec: QueryCodec = DEFAULT_CODEC) -> str:
    """Inverse of parse_url, in the order of RFC 3986 section 5.3"""
    result: str = f"{components.scheme}:"
    if components.authority is not None:
        result += f"//{build_authority(components.authority)}"
    result += components.path
    if components.query is not None:
        result += f"?{codec.encode(components.query)}"
    if components.fragment is not None:
        result += f"#{components.fragment}"
    return result
