"""Exceptions raised while splitting or assembling a URI.

Every parse failure is a ValueError, so callers that only care whether a
string parsed can catch that.
"""

from typing import Self


class ParseError(ValueError):
    """Base class for everything parse_url and the extractors raise."""


class SchemeMissingError(ParseError):
    def __init__(self: Self, url: str) -> None:
        super().__init__(f"no scheme delimiter ':' in {url!r}")
        self.url: str = url


class EmptyRemainderError(ParseError):
    def __init__(self: Self, stage: str) -> None:
        super().__init__(f"nothing left to parse at the {stage} stage")
        self.stage: str = stage


class PortNotNumericError(ParseError):
    """The text after the authority's last ':' is not a decimal number."""

    def __init__(self: Self, port: str, reason: str) -> None:
        super().__init__(f"unable to parse port {port!r}: {reason}")
        self.port: str = port
        self.reason: str = reason


class FragmentMissingError(ParseError):
    def __init__(self: Self, remainder: str) -> None:
        super().__init__(f"no fragment delimiter '#' in {remainder!r}")
        self.remainder: str = remainder


class UnexpectedRemainderError(ParseError):
    """A stage was handed text that does not start with any delimiter it knows."""

    def __init__(self: Self, stage: str, remainder: str) -> None:
        super().__init__(f"unexpected remainder at the {stage} stage: {remainder!r}")
        self.stage: str = stage
        self.remainder: str = remainder


class BuildError(ValueError):
    pass
