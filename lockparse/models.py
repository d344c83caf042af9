"""Core data models for lockparse."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union


class TokenKind(str, Enum):
    """Lexical categories produced by the scanner."""

    BOOLEAN = "BOOLEAN"
    STRING = "STRING"
    IDENTIFIER = "IDENTIFIER"  # reserved, the scanner lexes bare words as STRING
    EOF = "EOF"
    COLON = "COLON"
    NEWLINE = "NEWLINE"
    COMMENT = "COMMENT"
    INDENT = "INDENT"
    INVALID = "INVALID"
    NUMBER = "NUMBER"
    COMMA = "COMMA"


# Token kinds that may appear as the value of a `key value` line
VALUE_KINDS = frozenset({TokenKind.BOOLEAN, TokenKind.STRING, TokenKind.NUMBER})


@dataclass(frozen=True)
class Token:
    """A classified lexical unit with its start position."""

    line: int
    column: int
    kind: TokenKind
    value: bool | int | str | None = None

    def _expect(self, kind: TokenKind, value_type: type):
        if self.kind is not kind or not isinstance(self.value, value_type):
            raise TypeError(f"expected a {kind.value} token, got {self.kind.value}")
        return self.value

    def as_string(self) -> str:
        # COMMENT tokens carry raw text as well
        if self.kind is TokenKind.COMMENT:
            return self._expect(TokenKind.COMMENT, str)
        return self._expect(TokenKind.STRING, str)

    def as_number(self) -> int:
        return self._expect(TokenKind.NUMBER, int)

    def as_boolean(self) -> bool:
        return self._expect(TokenKind.BOOLEAN, bool)

    def as_indent(self) -> int:
        return self._expect(TokenKind.INDENT, int)

    @property
    def is_value(self) -> bool:
        """True if this token can be assigned as a leaf value."""
        return self.kind in VALUE_KINDS


# A parsed value is either a scalar leaf or a nested block
LockValue = Union[bool, int, str, "LockInfo"]
LockInfo = dict[str, LockValue]


@dataclass
class PackageInfo:
    """Typed view over one `name@range` block of a lockfile.

    The parser itself never validates blocks; this view picks out the
    conventional fields and keeps everything else in ``extra``.
    """

    version: str | None = None
    resolved: str | None = None
    dependencies: dict[str, str] = field(default_factory=dict)
    extra: dict[str, LockValue] = field(default_factory=dict)

    @classmethod
    def from_block(cls, block: LockInfo) -> PackageInfo:
        """Build a PackageInfo from a parsed block."""
        info = cls()
        for key, value in block.items():
            if key == "version":
                info.version = str(value)
            elif key == "resolved":
                info.resolved = str(value)
            elif key == "dependencies" and isinstance(value, dict):
                info.dependencies = {name: str(spec) for name, spec in value.items()}
            else:
                info.extra[key] = value
        return info


@dataclass
class Lockfile:
    """A parsed lockfile together with its header information."""

    source_label: str
    entries: LockInfo
    version: int | None = None  # from the `yarn lockfile vN` pragma
    comments: list[str] = field(default_factory=list)

    def package(self, spec: str) -> PackageInfo | None:
        """Return the PackageInfo for a `name@range` key, if present."""
        block = self.entries.get(spec)
        if not isinstance(block, dict):
            return None
        return PackageInfo.from_block(block)
