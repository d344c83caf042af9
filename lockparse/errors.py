"""Exceptions raised while reading lockfiles."""

from .config import DEFAULT_SOURCE_LABEL


class LockfileError(Exception):
    """Base class for all lockfile parsing failures."""


class PositionedError(LockfileError):
    """A failure tied to a line and column of the source text."""

    def __init__(
        self,
        message: str,
        line: int,
        column: int,
        source_label: str = DEFAULT_SOURCE_LABEL,
    ):
        self.message = message
        self.line = line
        self.column = column
        self.source_label = source_label
        super().__init__(f"{message} {line}:{column} in {source_label}")


class InvalidIndentation(PositionedError):
    """A line starts with an odd number of spaces."""


class UnexpectedToken(PositionedError):
    """The token stream does not match the lockfile grammar."""


class MalformedQuotedString(LockfileError):
    """A quoted literal could not be decoded.

    Raised by ``decode_quoted``. The scanner catches it and emits an INVALID
    token instead, so the parser then fails with UnexpectedToken.
    """


class UnsupportedLockfileVersion(LockfileError):
    """The version pragma declares a newer format than we understand."""

    def __init__(self, found: int, supported: int):
        self.found = found
        self.supported = supported
        super().__init__(
            f"Can't install from a lockfile of version {found} as you're on an old "
            f"yarn version that only supports versions up to {supported}. "
            "Run `$ yarn self-update` to upgrade to the latest version."
        )


class TokenStreamExhausted(LockfileError):
    """A token was requested after the end of input was already produced."""
