"""Query string codecs.

The parser never looks inside a query body itself; it hands the text to a
codec and stores whatever mapping comes back. Anything with matching decode
and encode methods can be passed as the codec.
"""

from typing import Mapping, Protocol, Self

from urllib.parse import parse_qsl, urlencode


class QueryCodec(Protocol):
    def decode(self: Self, body: str) -> dict[str, str]: ...

    def encode(self: Self, query: Mapping[str, str]) -> str: ...


class FormCodec:
    """application/x-www-form-urlencoded codec.

    decode("a=1&b&a=2") == {"a": "2", "b": ""}: a pair without "=" gets an
    empty value and the last occurrence of a key wins.
    encode({"a": "1", "b": ""}) == "a=1&b=": empty values keep their "=".
    Keys and values are percent-decoded/encoded, with "+" standing for a space.
    """

    def __init__(self: Self, safe: str = "", encoding: str = "utf-8") -> None:
        self.safe: str = safe
        self.encoding: str = encoding

    def decode(self: Self, body: str) -> dict[str, str]:
        return dict(parse_qsl(body, keep_blank_values=True, encoding=self.encoding))

    def encode(self: Self, query: Mapping[str, str]) -> str:
        return urlencode(query, safe=self.safe, encoding=self.encoding)

    def __repr__(self: Self) -> str:
        return f"{self.__class__.__name__}(safe={self.safe!r}, encoding={self.encoding!r})"


DEFAULT_CODEC: FormCodec = FormCodec()


def decode(body: str) -> dict[str, str]:
    return DEFAULT_CODEC.decode(body)


def encode(query: Mapping[str, str]) -> str:
    return DEFAULT_CODEC.encode(query)
